# main.py
import argparse
import json
import logging
import sys
from dataclasses import asdict

import requests
from solana.exceptions import SolanaRpcException

from logging_config import setup_logging
setup_logging()

from config import SOLANA_RPC_URL
from errors import MetadataError
from metadata import get_token_metadata

logger = logging.getLogger(__name__)


def run_for_mint(mint: str, rpc_url: str, use_token_list: bool = True, resolve_logos: bool = True) -> dict:
    res = get_token_metadata(mint, rpc_url=rpc_url, use_token_list=use_token_list, resolve_logos=resolve_logos)
    if res.logo is None:
        logger.info("No logo available for %s", mint)
    return asdict(res)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Fetch name, symbol and logo for a Solana token mint.")
    parser.add_argument("--mint", required=True, help="Token mint address (contract address)")
    parser.add_argument("--rpc", default=SOLANA_RPC_URL, help="Solana RPC URL")
    parser.add_argument("--no-token-list", action="store_true", help="Do not fall back to the token list registry")
    parser.add_argument("--no-logo", action="store_true", help="Skip fetching the logo from the metadata URI")

    args = parser.parse_args(argv)
    try:
        res = run_for_mint(args.mint, args.rpc, use_token_list=not args.no_token_list, resolve_logos=not args.no_logo)
    except (MetadataError, ValueError, requests.RequestException, SolanaRpcException) as e:
        logger.error("Metadata lookup failed for %s: %s", args.mint, e)
        return 1

    print(json.dumps(res, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
