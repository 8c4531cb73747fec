from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, orm

from crowallet.database import db


class Wallet(db.Base):  # type: ignore
    __tablename__ = "wallet"
    id = Column(Integer, primary_key=True)  # noqa
    time_created = Column(DateTime(), default=datetime.now)
    time_updated = Column(DateTime(), default=datetime.now, onupdate=datetime.now)
    identifier = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=False, default="")
    address = Column(String, nullable=False, default="")
    address_index = Column(Integer, nullable=False, default=0)
    derivation_path_standard = Column(String, nullable=False)
    wallet_type = Column(String, nullable=False)
    network_address_prefix = Column(String, nullable=False, default="cro")
    assets = orm.relationship("Asset", back_populates="wallet")

    def __repr__(self) -> str:
        return f"wallet: {self.identifier}, type: {self.wallet_type}, address: {self.address}"


class Asset(db.Base):  # type: ignore
    __tablename__ = "asset"
    id = Column(Integer, primary_key=True)  # noqa
    time_created = Column(DateTime(), default=datetime.now)
    time_updated = Column(DateTime(), default=datetime.now, onupdate=datetime.now)
    identifier = Column(String, nullable=False, unique=True)
    asset_type = Column(String, nullable=False)
    mainnet_symbol = Column(String, nullable=False)
    symbol = Column(String, nullable=False)
    name = Column(String, nullable=False, default="")
    decimals = Column(Integer, nullable=False, default=0)
    balance = Column(String, nullable=False, default="0")
    address = Column(String, nullable=False, default="")
    chain_name = Column(String)
    node_url = Column(String)
    indexing_url = Column(String)
    explorer_url = Column(String)
    address_prefix = Column(String)
    wallet = orm.relationship(Wallet, back_populates="assets")
    wallet_id = Column(Integer, ForeignKey("wallet.id"))

    def __repr__(self) -> str:
        return f"asset: {self.identifier}, symbol: {self.symbol}, address: {self.address}"


class AssetMarketPrice(db.Base):  # type: ignore
    __tablename__ = "asset_market_price"
    __table_args__ = (UniqueConstraint("asset_type", "asset_symbol", "currency"),)
    id = Column(Integer, primary_key=True)  # noqa
    time_updated = Column(DateTime(), default=datetime.now, onupdate=datetime.now)
    asset_type = Column(String, nullable=False)
    asset_symbol = Column(String, nullable=False)
    currency = Column(String, nullable=False)
    price = Column(String, nullable=False, default="")
    daily_change = Column(String, nullable=False, default="")
