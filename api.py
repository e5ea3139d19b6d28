from fastapi import FastAPI, HTTPException
from typing import Dict, Any, Optional
from dataclasses import asdict
from contextlib import asynccontextmanager
import logging

import requests
from solana.exceptions import SolanaRpcException

from logging_config import setup_logging
from errors import AccountNotFound, MalformedAccountData, MetadataError
from metadata import get_token_metadata

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context: initialize logging."""
    setup_logging()
    yield


app = FastAPI(title="Solana Token Metadata", lifespan=lifespan)


@app.get("/metadata/{mint}")
def read_metadata(mint: str, token_list: Optional[bool] = None, logo: bool = True) -> Dict[str, Any]:
    """Return name, symbol, uri and logo for a mint.

    `token_list` overrides the registry fallback setting; `logo=false` skips
    the uri document fetch.
    """
    try:
        res = get_token_metadata(mint, use_token_list=token_list, resolve_logos=logo)
    except (requests.RequestException, SolanaRpcException) as e:
        logger.warning("Metadata lookup failed for %s: %s", mint, e)
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AccountNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except MalformedAccountData as e:
        raise HTTPException(status_code=422, detail=str(e))
    except MetadataError as e:
        logger.warning("Metadata lookup failed for %s: %s", mint, e)
        raise HTTPException(status_code=502, detail=str(e))
    return asdict(res)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
