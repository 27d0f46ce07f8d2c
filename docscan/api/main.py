"""ASGI entry point: ``uvicorn docscan.api.main:app``."""

import uvicorn

from docscan.api.app import create_app

app = create_app()


def main() -> None:
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
