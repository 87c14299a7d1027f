"""
Quick check that the configured Gemini API key works.

    python -m careerdesk.check_api [model]
"""
import asyncio
import logging
import sys

from dotenv import load_dotenv

from .errors import ConfigurationError, ProviderError
from .gemini_client import GeminiClient, get_api_key
from .models import DEFAULT_MODEL

logger = logging.getLogger("careerdesk.check_api")


async def check(model: str = DEFAULT_MODEL) -> bool:
    key = get_api_key()
    logger.info(f"API Key present: {'Yes' if key else 'No'}")
    logger.info(f"API Key length: {len(key) if key else 0}")

    try:
        client = GeminiClient(api_key=key)
        logger.info(f"Trying {model} model...")
        text = await client.generate_content(model, 'Say "API is working!" in a single sentence.')
    except ConfigurationError as e:
        logger.error(str(e))
        return False
    except ProviderError as e:
        logger.error(f"Error: {e.message}")
        if e.status:
            logger.error(f"Status: {e.status}")
        return False

    logger.info(f"Success with {model}! Response: {text.strip()}")
    logger.info("Your Gemini API key is working correctly!")
    return True


def main(argv=None) -> int:
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = sys.argv[1:] if argv is None else argv
    ok = asyncio.run(check(args[0] if args else DEFAULT_MODEL))
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
