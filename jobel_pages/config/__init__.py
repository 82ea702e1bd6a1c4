"""Load and validate the Jobel site configuration YAML.

This subpackage parses ``config/site.yaml`` into strongly typed dataclasses
(:class:`SiteConfig` and friends). Site-wide settings that used to live as
ambient framework state (announcement bar, social card, colour mode, locales,
broken-link policy) are explicit here, so every later build stage is a pure
function of the config it is handed.

Examples
--------
>>> from pathlib import Path
>>> from jobel_pages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> site.build.policy.on_internal_unresolved  # doctest: +SKIP
<Severity.FAIL: 'fail'>
"""

from .loader import build_site_config, load_site_config
from .models import (
    AnnouncementConfig,
    BuildConfig,
    BuildPolicy,
    ButtonConfig,
    CardItem,
    CardsBlock,
    ContentBlock,
    ContentSettings,
    CtaBlock,
    FeatureItem,
    FeaturesBlock,
    FooterConfig,
    HeroBlock,
    HomepageConfig,
    HomepageVariant,
    I18nConfig,
    NavbarConfig,
    NavigationConfig,
    Severity,
    SiteConfig,
    SiteConfigError,
    SiteMetadata,
    StatItem,
    StatsBlock,
    StepItem,
    StepsBlock,
    ThemeConfig,
)

__all__ = [
    "AnnouncementConfig",
    "BuildConfig",
    "BuildPolicy",
    "ButtonConfig",
    "CardItem",
    "CardsBlock",
    "ContentBlock",
    "ContentSettings",
    "CtaBlock",
    "FeatureItem",
    "FeaturesBlock",
    "FooterConfig",
    "HeroBlock",
    "HomepageConfig",
    "HomepageVariant",
    "I18nConfig",
    "NavbarConfig",
    "NavigationConfig",
    "Severity",
    "SiteConfig",
    "SiteConfigError",
    "SiteMetadata",
    "StatItem",
    "StatsBlock",
    "StepItem",
    "StepsBlock",
    "ThemeConfig",
    "build_site_config",
    "load_site_config",
]
