"""Sequential provider fallback.

Only authentication failures move on to the next provider. Any other failure
is raised as-is and the remaining providers are not tried.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from coeditor.core.errors import CompletionError
from coeditor.core.models import Provider

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_with_fallback(
    order: Sequence[Provider],
    call: Callable[[Provider], Awaitable[T]],
) -> T:
    """Try each provider in order until one succeeds.

    Args:
        order: Providers to try, first to last. Must not be empty.
        call: Coroutine function performing the request against a provider.

    Returns:
        The first successful result.

    Raises:
        ValueError: If order is empty. Callers check for a configured provider first.
        CompletionError: The first non-auth failure, or the last auth failure
            once every provider has been tried.
    """
    if not order:
        raise ValueError("run_with_fallback requires at least one provider")

    last_index = len(order) - 1

    for index, provider in enumerate(order):
        try:
            logger.info(f"Using provider: {provider.value}")
            return await call(provider)
        except CompletionError as e:
            logger.warning(f"Provider failed: {provider.value} - {e.message}")
            if not e.is_auth_failure or index == last_index:
                raise

    raise RuntimeError("unreachable: every provider attempt returns or raises")
