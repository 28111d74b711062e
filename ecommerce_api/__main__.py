"""
Run the API with uvicorn: ``python -m ecommerce_api``
"""
import uvicorn

from ecommerce_api.config import settings


def main() -> None:
    uvicorn.run(
        "ecommerce_api.main:app",
        host="0.0.0.0",
        port=settings.SERVICE_PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
