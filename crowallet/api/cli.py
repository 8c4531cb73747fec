from crowallet.api.core.logger import logger
from crowallet.api.factory import create_app

app = create_app()

if __name__ == '__main__':
    import uvicorn

    logger.info("Starting uvicorn in reload mode")
    uvicorn.run(
        "crowallet.api.cli:app",
        host="127.0.0.1",
        reload=True,
        port=int("8001"),
    )
