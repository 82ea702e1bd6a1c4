"""Homepage-specific configuration builders.

Each homepage variant is an ordered list of content-block descriptors. The
block ``kind`` selects the builder; unknown kinds are rejected so a typo never
silently drops a section.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .helpers import _as_list, _as_mapping, _optional_str, _require_str
from .models import (
    ButtonConfig,
    CardItem,
    CardsBlock,
    ContentBlock,
    CtaBlock,
    FeatureItem,
    FeaturesBlock,
    HeroBlock,
    HomepageConfig,
    HomepageVariant,
    SiteConfigError,
    StatItem,
    StatsBlock,
    StepItem,
    StepsBlock,
)


def _build_homepage_config(payload: typ.Mapping[str, typ.Any]) -> HomepageConfig:
    """Build the homepage configuration from the provided payload."""
    data = _as_mapping(payload, "Homepage configuration")
    variants_raw = _as_mapping(data.get("variants"), "Homepage 'variants'")
    if not variants_raw:
        msg = "Homepage configuration requires at least one variant."
        raise SiteConfigError(msg)

    variants: dict[str, HomepageVariant] = {}
    for name, variant_payload in variants_raw.items():
        variants[str(name)] = _build_variant(str(name), variant_payload)

    selected = _optional_str(data.get("variant"))
    if selected is None:
        if len(variants) > 1:
            names = ", ".join(variants)
            msg = (
                "Homepage defines several variants "
                f"({names}); choose one with 'variant'."
            )
            raise SiteConfigError(msg)
        selected = next(iter(variants))
    if selected not in variants:
        msg = f"Homepage variant '{selected}' is not defined."
        raise SiteConfigError(msg)

    return HomepageConfig(
        variant=selected,
        variants=variants,
        output=Path(data.get("output", "index.html")),
    )


def _build_variant(name: str, payload: object) -> HomepageVariant:
    """Build one named homepage variant and its ordered blocks."""
    context = f"Homepage variant '{name}'"
    data = _as_mapping(payload, context)
    title = _require_str(data, "title", context)
    description = _require_str(data, "description", context)
    entries = _as_list(data.get("blocks"), f"{context} blocks")
    blocks = [
        _build_block(entry, f"{context} block {index}")
        for index, entry in enumerate(entries, 1)
    ]
    if not blocks:
        msg = f"{context} requires at least one block."
        raise SiteConfigError(msg)
    return HomepageVariant(
        name=name, title=title, description=description, blocks=blocks
    )


def _build_block(entry: object, context: str) -> ContentBlock:
    """Dispatch a block descriptor to the builder for its kind."""
    data = _as_mapping(entry, context)
    match data.get("kind"):
        case "hero":
            return HeroBlock(
                title=_require_str(data, "title", context),
                subtitle=_require_str(data, "subtitle", context),
                eyebrow=_optional_str(data.get("eyebrow")),
                buttons=_build_buttons(data.get("buttons"), context),
                badges=[
                    str(badge)
                    for badge in _as_list(data.get("badges"), f"{context} badges")
                ],
            )
        case "stats":
            return StatsBlock(items=_build_stats(data.get("items"), context))
        case "features":
            return FeaturesBlock(
                heading=_require_str(data, "heading", context),
                subtitle=_optional_str(data.get("subtitle")),
                items=_build_features(data.get("items"), context),
            )
        case "cards":
            return CardsBlock(
                heading=_require_str(data, "heading", context),
                subtitle=_optional_str(data.get("subtitle")),
                footnote=_optional_str(data.get("footnote")),
                items=_build_cards(data.get("items"), context),
            )
        case "steps":
            return StepsBlock(
                heading=_require_str(data, "heading", context),
                steps=_build_steps(data.get("steps"), context),
            )
        case "cta":
            return CtaBlock(
                heading=_require_str(data, "heading", context),
                text=_require_str(data, "text", context),
                buttons=_build_buttons(data.get("buttons"), context),
            )
        case kind:
            msg = f"{context} has unknown kind {kind!r}."
            raise SiteConfigError(msg)


def _build_buttons(entries: object, context: str) -> list[ButtonConfig]:
    """Build CTA buttons; each needs a label and exactly one of 'to'/'href'."""
    buttons: list[ButtonConfig] = []
    for entry in _as_list(entries, f"{context} buttons"):
        data = _as_mapping(entry, f"{context} button")
        label = _require_str(data, "label", f"{context} button")
        to = _optional_str(data.get("to"))
        href = _optional_str(data.get("href"))
        if (to is None) == (href is None):
            msg = f"{context} button '{label}' needs exactly one of 'to' or 'href'."
            raise SiteConfigError(msg)
        buttons.append(
            ButtonConfig(
                label=label,
                variant=_optional_str(data.get("variant")) or "primary",
                to=to,
                href=href,
            )
        )
    return buttons


def _build_stats(entries: object, context: str) -> list[StatItem]:
    """Build stat cards for a stats block."""
    items: list[StatItem] = []
    for entry in _as_list(entries, f"{context} items"):
        data = _as_mapping(entry, f"{context} stat")
        items.append(
            StatItem(
                value=_require_str(data, "value", f"{context} stat"),
                label=_require_str(data, "label", f"{context} stat"),
                sublabel=_optional_str(data.get("sublabel")),
            )
        )
    if not items:
        msg = f"{context} requires at least one stat."
        raise SiteConfigError(msg)
    return items


def _build_features(entries: object, context: str) -> list[FeatureItem]:
    """Build feature cards for a features block."""
    items: list[FeatureItem] = []
    for entry in _as_list(entries, f"{context} items"):
        data = _as_mapping(entry, f"{context} feature")
        items.append(
            FeatureItem(
                title=_require_str(data, "title", f"{context} feature"),
                description=_require_str(data, "description", f"{context} feature"),
                highlight=_optional_str(data.get("highlight")),
            )
        )
    if not items:
        msg = f"{context} requires at least one feature."
        raise SiteConfigError(msg)
    return items


def _build_cards(entries: object, context: str) -> list[CardItem]:
    """Build icon cards for a cards block."""
    items: list[CardItem] = []
    for entry in _as_list(entries, f"{context} items"):
        data = _as_mapping(entry, f"{context} card")
        items.append(
            CardItem(
                name=_require_str(data, "name", f"{context} card"),
                role=_require_str(data, "role", f"{context} card"),
                icon=_optional_str(data.get("icon")),
            )
        )
    if not items:
        msg = f"{context} requires at least one card."
        raise SiteConfigError(msg)
    return items


def _build_steps(entries: object, context: str) -> list[StepItem]:
    """Build the ordered steps of a steps block."""
    steps: list[StepItem] = []
    for entry in _as_list(entries, f"{context} steps"):
        data = _as_mapping(entry, f"{context} step")
        steps.append(
            StepItem(
                title=_require_str(data, "title", f"{context} step"),
                text=_require_str(data, "text", f"{context} step"),
            )
        )
    if not steps:
        msg = f"{context} requires at least one step."
        raise SiteConfigError(msg)
    return steps


__all__ = [
    "_build_block",
    "_build_buttons",
    "_build_homepage_config",
    "_build_variant",
]
