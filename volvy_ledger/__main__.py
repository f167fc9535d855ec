"""Run the service with uvicorn: python -m volvy_ledger"""

import uvicorn

from volvy_ledger.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "volvy_ledger.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
