"""Submit a PDF to a running scan API and print the verdict.

Usage: python -m docscan.client.main path/to/document.pdf
"""

import asyncio
import json
import sys
from pathlib import Path

import httpx

from docscan.client.poll_controller import PollState, ScanSession, build_poll_controller
from docscan.client.scan_client import ScanClient
from docscan.config.settings import Settings
from docscan.logging.logger import Log


async def scan_file(path: Path, settings: Settings) -> int:
    async with httpx.AsyncClient(base_url=settings.scan_api_base_url) as http:
        client = ScanClient(http)
        session = ScanSession(client, build_poll_controller(settings, client))
        outcome = await session.run(path.read_bytes(), path.name)

    if outcome.state is PollState.DELIVERED and outcome.result is not None:
        print(json.dumps(outcome.result.to_dict(), indent=2, ensure_ascii=False))
        return 0
    print(outcome.error or outcome.state.value, file=sys.stderr)
    return 1


def main() -> None:
    if len(sys.argv) != 2:
        print(__doc__, file=sys.stderr)
        sys.exit(2)
    settings = Settings()
    Log.configure(settings.log_level)
    sys.exit(asyncio.run(scan_file(Path(sys.argv[1]), settings)))


if __name__ == "__main__":
    main()
