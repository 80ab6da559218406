from __future__ import annotations

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from core.config import settings
from core.i18n import set_locale


def _pick_from_accept_language(al: str, default: str) -> str:
    """Parse Accept-Language with q weights, return best lang tag.

    Examples:
      'en-GB,en;q=0.9,fr;q=0.8' -> 'en-GB'
    """
    items = []
    for part in al.split(','):
        p = part.strip()
        if not p:
            continue
        seg = p.split(';', 1)
        lang = seg[0].strip()
        q = 1.0
        if len(seg) == 2 and seg[1].strip().startswith('q='):
            try:
                q = float(seg[1].strip()[2:])
            except ValueError:
                q = 1.0
        if lang and lang != '*':
            items.append((lang, q))
    if not items:
        return default
    # sort by q desc, keep order for ties
    items.sort(key=lambda x: x[1], reverse=True)
    return items[0][0]


def _normalize(lang: str) -> str:
    """'en-gb' -> 'en_GB', 'FR' -> 'fr'."""
    tag = (lang or '').strip().replace('-', '_')
    if not tag:
        return settings.store.default_language
    primary, _, region = tag.partition('_')
    return f"{primary.lower()}_{region.upper()}" if region else primary.lower()


class LocaleMiddleware(BaseHTTPMiddleware):
    """Parse locale from query/header and set into context.

    Priority: ?lang=xx > X-Lang > Accept-Language > store default language.
    """

    async def dispatch(self, request: Request, call_next):
        default = settings.store.default_language
        lang = request.query_params.get("lang") or request.headers.get("X-Lang")
        if not lang:
            al = request.headers.get("Accept-Language", "")
            lang = _pick_from_accept_language(al, default) if al else default
        locale = _normalize(lang)
        set_locale(locale)
        request.state.locale = locale
        return await call_next(request)
