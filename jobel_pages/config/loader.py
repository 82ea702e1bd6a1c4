"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _as_list,
    _as_mapping,
    _check_hex_color,
    _is_absolute_url,
    _optional_str,
    _parse_bool,
    _parse_severity,
    _require_str,
)
from .homepage import _build_homepage_config
from .models import (
    AnnouncementConfig,
    BuildConfig,
    BuildPolicy,
    ContentSettings,
    FooterConfig,
    I18nConfig,
    NavbarConfig,
    NavigationConfig,
    Severity,
    SiteConfig,
    SiteConfigError,
    SiteMetadata,
    ThemeConfig,
)

DEFAULT_MAX_DEPTH = 5
COLOR_MODES = ("light", "dark")


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the site, content and navigation.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/site.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration: site metadata, locales, content locations,
        build policy, the declarative navigation and the homepage variants.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If required sections or fields are missing or invalid.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from jobel_pages.config import load_site_config
    >>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> config.i18n.default_locale  # doctest: +SKIP
    'en'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    return build_site_config(loaded)


def build_site_config(loaded: object) -> SiteConfig:
    """Build a SiteConfig from an already-parsed YAML document."""
    raw = _as_mapping(loaded, "Top-level configuration")
    if "site" not in raw:
        msg = "Configuration requires a 'site' section."
        raise SiteConfigError(msg)
    if "navigation" not in raw:
        msg = "Configuration requires a 'navigation' section."
        raise SiteConfigError(msg)

    homepage_raw = raw.get("homepage")
    announcement_raw = raw.get("announcement")
    return SiteConfig(
        site=_build_site_metadata(raw["site"]),
        navigation=_build_navigation_config(raw["navigation"]),
        i18n=_build_i18n_config(raw.get("i18n")),
        content=_build_content_settings(raw.get("content")),
        build=_build_build_config(raw.get("build")),
        theme=_build_theme_config(raw.get("theme")),
        announcement=(
            _build_announcement(announcement_raw) if announcement_raw else None
        ),
        homepage=_build_homepage_config(homepage_raw) if homepage_raw else None,
    )


def _build_site_metadata(payload: object) -> SiteMetadata:
    """Build site identity values, checking URL shapes."""
    data = _as_mapping(payload, "Site section")
    url = _require_str(data, "url", "Site section")
    if not _is_absolute_url(url):
        msg = f"Site 'url' must be absolute (got {url!r})."
        raise SiteConfigError(msg)
    base_url = _optional_str(data.get("base_url")) or "/"
    if not (base_url.startswith("/") and base_url.endswith("/")):
        msg = f"Site 'base_url' must start and end with '/' (got {base_url!r})."
        raise SiteConfigError(msg)
    edit_url = _optional_str(data.get("edit_url"))
    if edit_url is not None and not _is_absolute_url(edit_url):
        msg = f"Site 'edit_url' must be absolute (got {edit_url!r})."
        raise SiteConfigError(msg)
    trailing_slash = data.get("trailing_slash")
    if trailing_slash is not None:
        trailing_slash = _parse_bool(
            trailing_slash, default=False, context="Site 'trailing_slash'"
        )
    return SiteMetadata(
        title=_require_str(data, "title", "Site section"),
        tagline=_require_str(data, "tagline", "Site section"),
        url=url.rstrip("/"),
        base_url=base_url,
        favicon=_optional_str(data.get("favicon")),
        social_card=_optional_str(data.get("social_card")),
        edit_url=edit_url,
        trailing_slash=trailing_slash,
    )


def _build_announcement(payload: object) -> AnnouncementConfig:
    """Build the announcement bar, validating its colours."""
    context = "Announcement"
    data = _as_mapping(payload, context)
    base = AnnouncementConfig(id="", content="")
    return AnnouncementConfig(
        id=_require_str(data, "id", context),
        content=_require_str(data, "content", context),
        background_color=_check_hex_color(
            _optional_str(data.get("background_color")) or base.background_color,
            f"{context} 'background_color'",
        ),
        text_color=_check_hex_color(
            _optional_str(data.get("text_color")) or base.text_color,
            f"{context} 'text_color'",
        ),
        closeable=_parse_bool(
            data.get("closeable"), default=True, context=f"{context} 'closeable'"
        ),
    )


def _build_theme_config(payload: object) -> ThemeConfig:
    """Build colour-mode defaults."""
    data = _as_mapping(payload, "Theme section")
    base = ThemeConfig()
    color_mode = _optional_str(data.get("color_mode")) or base.color_mode
    if color_mode not in COLOR_MODES:
        msg = f"Theme 'color_mode' must be one of {', '.join(COLOR_MODES)}."
        raise SiteConfigError(msg)
    return ThemeConfig(
        color_mode=color_mode,
        disable_switch=_parse_bool(
            data.get("disable_switch"),
            default=base.disable_switch,
            context="Theme 'disable_switch'",
        ),
        respect_prefers_color_scheme=_parse_bool(
            data.get("respect_prefers_color_scheme"),
            default=base.respect_prefers_color_scheme,
            context="Theme 'respect_prefers_color_scheme'",
        ),
    )


def _build_i18n_config(payload: object) -> I18nConfig:
    """Build the locale list; the default locale must be one of them."""
    data = _as_mapping(payload, "i18n section")
    default_locale = _optional_str(data.get("default_locale")) or "en"
    locales = [
        str(locale).strip()
        for locale in _as_list(data.get("locales"), "i18n 'locales'")
        if str(locale).strip()
    ] or [default_locale]
    if default_locale not in locales:
        msg = f"Default locale '{default_locale}' is not listed in i18n 'locales'."
        raise SiteConfigError(msg)
    if len(set(locales)) != len(locales):
        msg = "i18n 'locales' contains duplicates."
        raise SiteConfigError(msg)
    return I18nConfig(default_locale=default_locale, locales=locales)


def _build_content_settings(payload: object) -> ContentSettings:
    """Build content locations and the docs route base."""
    data = _as_mapping(payload, "Content section")
    base = ContentSettings()
    route_base = _optional_str(data.get("route_base")) or base.route_base
    if not route_base.startswith("/"):
        msg = f"Content 'route_base' must start with '/' (got {route_base!r})."
        raise SiteConfigError(msg)
    return ContentSettings(
        docs_dir=Path(data.get("docs_dir", base.docs_dir)),
        i18n_dir=Path(data.get("i18n_dir", base.i18n_dir)),
        route_base=route_base.rstrip("/") or "/",
        home_page=_optional_str(data.get("home_page")) or base.home_page,
    )


def _build_build_config(payload: object) -> BuildConfig:
    """Build output location and reference policy."""
    data = _as_mapping(payload, "Build section")
    return BuildConfig(
        output_dir=Path(data.get("output_dir", "public")),
        policy=_build_policy(data.get("policy")),
    )


def _build_policy(payload: object) -> BuildPolicy:
    """Build the gate policy, accepting Docusaurus-style key names."""
    data = _as_mapping(payload, "Build policy")
    base = BuildPolicy()
    internal = data.get("on_internal_unresolved", data.get("on_broken_links"))
    content = data.get("on_content_unresolved", data.get("on_broken_markdown_links"))
    return BuildPolicy(
        on_internal_unresolved=_parse_severity(
            internal,
            default=base.on_internal_unresolved,
            allowed=(Severity.FAIL, Severity.WARN),
            context="Policy 'on_internal_unresolved'",
        ),
        on_content_unresolved=_parse_severity(
            content,
            default=base.on_content_unresolved,
            allowed=(Severity.FAIL, Severity.WARN, Severity.IGNORE),
            context="Policy 'on_content_unresolved'",
        ),
        on_external_unchecked=_parse_severity(
            data.get("on_external_unchecked"),
            default=base.on_external_unchecked,
            allowed=(Severity.IGNORE,),
            context="Policy 'on_external_unchecked'",
        ),
    )


def _build_navigation_config(payload: object) -> NavigationConfig:
    """Capture the declarative navigation; tree checks happen in the builders."""
    data = _as_mapping(payload, "Navigation section")
    max_depth = data.get("max_depth", DEFAULT_MAX_DEPTH)
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        msg = "Navigation 'max_depth' must be a positive integer."
        raise SiteConfigError(msg)

    sidebars_raw = _as_mapping(data.get("sidebars"), "Navigation 'sidebars'")
    sidebars: dict[str, list[typ.Any]] = {
        str(name): _as_list(items, f"Sidebar '{name}'")
        for name, items in sidebars_raw.items()
    }

    navbar_raw = _as_mapping(data.get("navbar"), "Navbar")
    logo = _as_mapping(navbar_raw.get("logo"), "Navbar 'logo'")
    navbar = NavbarConfig(
        title=_require_str(navbar_raw, "title", "Navbar"),
        logo_src=_optional_str(logo.get("src")),
        logo_alt=_optional_str(logo.get("alt")),
        items=_as_list(navbar_raw.get("items"), "Navbar 'items'"),
    )

    footer_raw = _as_mapping(data.get("footer"), "Footer")
    footer = FooterConfig(
        style=_optional_str(footer_raw.get("style")) or "dark",
        copyright=_optional_str(footer_raw.get("copyright")) or "",
        groups=_as_list(footer_raw.get("links"), "Footer 'links'"),
    )
    return NavigationConfig(
        navbar=navbar, footer=footer, sidebars=sidebars, max_depth=max_depth
    )


__all__ = ["DEFAULT_MAX_DEPTH", "build_site_config", "load_site_config"]
