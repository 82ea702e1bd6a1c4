"""Typed dataclasses describing Jobel site configuration structures."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ
from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class Severity(enum.Enum):
    """How the build gate treats a class of unresolved references."""

    FAIL = "fail"
    WARN = "warn"
    IGNORE = "ignore"


@dc.dataclass(frozen=True, slots=True)
class BuildPolicy:
    """Per-tier severities applied by the build gate."""

    on_internal_unresolved: Severity = Severity.FAIL
    on_content_unresolved: Severity = Severity.WARN
    on_external_unchecked: Severity = Severity.IGNORE

    def __post_init__(self) -> None:
        """Reject severities a tier cannot take.

        Raises
        ------
        SiteConfigError
            If navigation references are set to ``ignore`` or external links
            to anything but ``ignore``.
        """
        if self.on_internal_unresolved not in (Severity.FAIL, Severity.WARN):
            msg = "'on_internal_unresolved' must be fail or warn."
            raise SiteConfigError(msg)
        if self.on_external_unchecked is not Severity.IGNORE:
            msg = "'on_external_unchecked' must be ignore."
            raise SiteConfigError(msg)


@dc.dataclass(slots=True)
class SiteMetadata:
    """Site-wide identity and routing values."""

    title: str
    tagline: str
    url: str
    base_url: str = "/"
    favicon: str | None = None
    social_card: str | None = None
    edit_url: str | None = None
    trailing_slash: bool | None = None


@dc.dataclass(slots=True)
class AnnouncementConfig:
    """Dismissible banner shown above the navbar."""

    id: str
    content: str
    background_color: str = "#ffffff"
    text_color: str = "#000000"
    closeable: bool = True


@dc.dataclass(slots=True)
class ThemeConfig:
    """Colour-mode defaults handed to the renderer."""

    color_mode: str = "light"
    disable_switch: bool = False
    respect_prefers_color_scheme: bool = True


@dc.dataclass(slots=True)
class I18nConfig:
    """Locales the content is partitioned into."""

    default_locale: str = "en"
    locales: list[str] = dc.field(default_factory=lambda: ["en"])


@dc.dataclass(slots=True)
class ContentSettings:
    """Where page sources live and how doc routes map onto identifiers."""

    docs_dir: Path = Path("docs")
    i18n_dir: Path = Path("i18n")
    route_base: str = "/docs"
    home_page: str = "intro"


@dc.dataclass(slots=True)
class BuildConfig:
    """Output location and reference policy for a build."""

    output_dir: Path = Path("public")
    policy: BuildPolicy = dc.field(default_factory=BuildPolicy)


@dc.dataclass(slots=True)
class NavbarConfig:
    """Navbar branding plus the raw declarative item list."""

    title: str
    logo_src: str | None = None
    logo_alt: str | None = None
    items: list[typ.Any] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class FooterConfig:
    """Footer style, copyright line and raw link groups."""

    style: str = "dark"
    copyright: str = ""
    groups: list[typ.Any] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class NavigationConfig:
    """Declarative navigation description, validated by the nav builders."""

    navbar: NavbarConfig
    footer: FooterConfig
    sidebars: dict[str, list[typ.Any]] = dc.field(default_factory=dict)
    max_depth: int = 5


@dc.dataclass(slots=True)
class ButtonConfig:
    """Call-to-action button inside a homepage block."""

    label: str
    variant: str = "primary"
    to: str | None = None
    href: str | None = None


@dc.dataclass(slots=True)
class HeroBlock:
    """Headline block opening the homepage."""

    title: str
    subtitle: str
    eyebrow: str | None = None
    buttons: list[ButtonConfig] = dc.field(default_factory=list)
    badges: list[str] = dc.field(default_factory=list)
    kind: typ.ClassVar[str] = "hero"


@dc.dataclass(slots=True)
class StatItem:
    """Single figure in a stats block."""

    value: str
    label: str
    sublabel: str | None = None


@dc.dataclass(slots=True)
class StatsBlock:
    """Row of headline figures."""

    items: list[StatItem]
    kind: typ.ClassVar[str] = "stats"


@dc.dataclass(slots=True)
class FeatureItem:
    """Feature card with a highlight ribbon."""

    title: str
    description: str
    highlight: str | None = None


@dc.dataclass(slots=True)
class FeaturesBlock:
    """Grid of feature cards."""

    heading: str
    items: list[FeatureItem]
    subtitle: str | None = None
    kind: typ.ClassVar[str] = "features"


@dc.dataclass(slots=True)
class CardItem:
    """Icon card, e.g. one agent in a pipeline."""

    name: str
    role: str
    icon: str | None = None


@dc.dataclass(slots=True)
class CardsBlock:
    """Sequence of icon cards with an optional footnote."""

    heading: str
    items: list[CardItem]
    subtitle: str | None = None
    footnote: str | None = None
    kind: typ.ClassVar[str] = "cards"


@dc.dataclass(slots=True)
class StepItem:
    """Numbered step in a how-it-works block."""

    title: str
    text: str


@dc.dataclass(slots=True)
class StepsBlock:
    """Ordered sequence of steps."""

    heading: str
    steps: list[StepItem]
    kind: typ.ClassVar[str] = "steps"


@dc.dataclass(slots=True)
class CtaBlock:
    """Closing call-to-action block."""

    heading: str
    text: str
    buttons: list[ButtonConfig] = dc.field(default_factory=list)
    kind: typ.ClassVar[str] = "cta"


ContentBlock = (
    HeroBlock | StatsBlock | FeaturesBlock | CardsBlock | StepsBlock | CtaBlock
)


@dc.dataclass(slots=True)
class HomepageVariant:
    """One complete homepage content set."""

    name: str
    title: str
    description: str
    blocks: list[ContentBlock]


@dc.dataclass(slots=True)
class HomepageConfig:
    """Homepage variants and the one selected for this build."""

    variant: str
    variants: dict[str, HomepageVariant]
    output: Path = Path("index.html")

    @property
    def selected(self) -> HomepageVariant:
        """Return the variant chosen for this build."""
        return self.variants[self.variant]


@dc.dataclass(slots=True)
class SiteConfig:
    """Explicit, validated configuration for one build."""

    site: SiteMetadata
    navigation: NavigationConfig
    i18n: I18nConfig = dc.field(default_factory=I18nConfig)
    content: ContentSettings = dc.field(default_factory=ContentSettings)
    build: BuildConfig = dc.field(default_factory=BuildConfig)
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)
    announcement: AnnouncementConfig | None = None
    homepage: HomepageConfig | None = None


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
]
