"""APIサーバー エントリポイント: python -m apptnu で起動"""
import uvicorn

from apptnu.core.config import settings


def main():
    uvicorn.run(
        "apptnu.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG and settings.ENV == "development",
    )


if __name__ == "__main__":
    main()
