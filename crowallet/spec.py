import typing

if typing.TYPE_CHECKING:
    from crowallet.ledger.sequencer import SequencerEvent

ProgressListener = typing.Callable[["SequencerEvent"], None]
