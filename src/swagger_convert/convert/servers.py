"""Build the OpenAPI ``servers`` list from Swagger 2.0 ``schemes``, ``host`` and ``basePath``."""

from __future__ import annotations

from typing import Optional, Sequence

from swagger_convert.models import TransferScheme

DEFAULT_BASE_PATH = "/"


def synthesize_servers(
    schemes: Optional[Sequence[TransferScheme]],
    host: Optional[str],
    base_path: Optional[str],
) -> list[dict[str, str]]:
    """Return one server per scheme, in declared order.

    Without ``schemes`` or without ``host`` there is nothing to build a URL
    from and the result is empty. Duplicate schemes yield duplicate servers.

    Example::

        >>> synthesize_servers([TransferScheme.HTTPS], "api.example.com", "/v1")
        [{'url': 'https://api.example.com/v1'}]
    """
    if schemes is None or host is None:
        return []
    base = DEFAULT_BASE_PATH if base_path is None else base_path
    return [{"url": f"{TransferScheme(scheme).value}://{host}{base}"} for scheme in schemes]
