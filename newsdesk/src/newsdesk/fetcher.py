import concurrent.futures
import logging
import time
from typing import List, Optional

from .config import DEFAULT_TIMEOUT
from .errors import ProviderError
from .models.article import DateRange
from .models.provider import ProviderResult
from .providers.base import NewsProvider

logger = logging.getLogger(__name__)

# Extra wait on top of the HTTP timeout before a provider is given up on
JOIN_GRACE_SECONDS = 2.0


def fetch_one(provider: NewsProvider, region: str, date_range: Optional[DateRange] = None) -> ProviderResult:
    """Run one provider call and tag the outcome. Never raises."""
    start = time.time()
    try:
        articles = provider.fetch(region, date_range)
        return ProviderResult(
            provider=provider.name,
            ok=True,
            articles=articles,
            shape=provider.shape,
            duration=time.time() - start,
        )
    except ProviderError as e:
        status = f" (HTTP {e.status_code})" if e.status_code else ""
        logger.error(f"Provider {provider.name} failed{status}: {e.message}")
        error = e.message
        details = {"provider": provider.name, **e.details}
    except Exception as e:
        logger.error(f"Provider {provider.name} crashed: {e}")
        error = str(e) or e.__class__.__name__
        details = {"provider": provider.name, "exception": e.__class__.__name__}
    return ProviderResult(
        provider=provider.name,
        ok=False,
        shape=provider.shape,
        error=error,
        details=details,
        duration=time.time() - start,
    )


def fetch_all(
    providers: List[NewsProvider],
    region: str,
    date_range: Optional[DateRange] = None,
    timeout: Optional[float] = None,
) -> List[ProviderResult]:
    """
    Query every provider concurrently and wait for all of them to settle.
    Results keep the order of ``providers``.
    """
    if not providers:
        return []

    timeout = timeout or max(p.timeout for p in providers) or DEFAULT_TIMEOUT
    results: List[Optional[ProviderResult]] = [None] * len(providers)

    executor = concurrent.futures.ThreadPoolExecutor(max_workers=len(providers))
    try:
        futures = {
            executor.submit(fetch_one, provider, region, date_range): idx
            for idx, provider in enumerate(providers)
        }
        done, not_done = concurrent.futures.wait(futures, timeout=timeout + JOIN_GRACE_SECONDS)
        for fut in done:
            results[futures[fut]] = fut.result()
        for fut in not_done:
            provider = providers[futures[fut]]
            fut.cancel()
            logger.error(f"Provider {provider.name} timed out after {timeout:.1f}s")
            results[futures[fut]] = ProviderResult(
                provider=provider.name,
                ok=False,
                shape=provider.shape,
                error=f"timed out after {timeout:.1f}s",
                details={"provider": provider.name, "timeout": timeout},
                duration=timeout,
            )
    finally:
        # Do not block on stragglers, their results are already discarded
        executor.shutdown(wait=False)

    ok_count = sum(1 for r in results if r.ok)
    logger.info(f"Fetched from {ok_count}/{len(providers)} providers for region={region}")
    return results
