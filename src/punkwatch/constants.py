from __future__ import annotations

# CryptoPunks market contract on Ethereum mainnet (lowercase, 0x-prefixed)
CRYPTOPUNKS_MARKET = "0xb47e3cd837ddf8e4c57f05d70ab865de6e193bbb"

INFURA_WS_URL = "wss://mainnet.infura.io/ws/v3/{project_id}"

# single-event watch defaults
BID_ENTERED_EVENT = "PunkBidEntered"
DEFAULT_PUNK_INDEX = 1943
