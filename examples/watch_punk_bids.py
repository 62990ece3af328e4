import asyncio
import os

from dotenv import load_dotenv

from punkwatch.core.config import WatchConfig, WatchMode
from punkwatch.constants import CRYPTOPUNKS_MARKET, INFURA_WS_URL
from punkwatch.orchestration.orchestrator import run_watch

load_dotenv()

config = WatchConfig(
    ws_url=INFURA_WS_URL.format(project_id=os.environ["INFURA_PROJECT_ID"]),
    webhook_url=os.environ["DISCORD_WEBHOOK_URL"],
    contract_address=CRYPTOPUNKS_MARKET,
    mode=WatchMode(kind="single", punk_index=1943),  # stop on the first log that is not a bid on punk 1943
)


async def main():
    outcome = await run_watch(config)
    print(outcome.stop_reason)
    print(outcome.stats)


asyncio.run(main())
