"""Campsite shaping: features, equipment, media and vehicle length limits."""

from __future__ import annotations

from collections.abc import Iterable

from campvue.classify import classify
from campvue.datasources.ridb.models import Attribute, Campsite, EntityMedia, PermittedEquipment
from campvue.normalize.text import normalize_coordinate, normalize_site_number
from campvue.schemas import (
    ClassifiedAttribute,
    FacilityMaxLength,
    NormalizedCampsite,
    NormalizedEquipment,
    NormalizedMedia,
    SiteMaxLength,
)


def normalize_attributes(attributes: Iterable[Attribute]) -> list[ClassifiedAttribute]:
    """Classify each raw attribute, preserving order."""
    return [classify(a) for a in attributes]


def normalize_equipment(equipment: Iterable[PermittedEquipment]) -> list[NormalizedEquipment]:
    return [NormalizedEquipment(name=e.name, max_length=e.max_length) for e in equipment]


def normalize_media(media: Iterable[EntityMedia]) -> list[NormalizedMedia]:
    return [
        NormalizedMedia(
            attribution=m.credits,
            description=m.description,
            height=m.height,
            width=m.width,
            is_gallery=m.is_gallery,
            is_preview=m.is_preview,
            is_primary=m.is_primary,
            type=m.media_type.lower() if m.media_type else None,
            subtitle=m.subtitle,
            title=m.title,
            url=str(m.url),
        )
        for m in media
    ]


def normalize_campsite(campsite: Campsite) -> NormalizedCampsite:
    return NormalizedCampsite(
        campsite_id=campsite.campsite_id,
        facility_id=campsite.facility_id,
        name=campsite.name,
        site_number=normalize_site_number(campsite.name),
        loop=campsite.loop,
        campsite_type=campsite.campsite_type,
        reservable=campsite.reservable,
        accessible=campsite.accessible,
        latitude=normalize_coordinate(campsite.latitude),
        longitude=normalize_coordinate(campsite.longitude),
        features=normalize_attributes(campsite.attributes),
        equipment=normalize_equipment(campsite.permitted_equipment),
        media=normalize_media(campsite.entity_media),
    )


def normalize_campsites(campsites: Iterable[Campsite]) -> list[NormalizedCampsite]:
    return [normalize_campsite(c) for c in campsites]


# =============================================================================
# Vehicle lengths
# =============================================================================


def max_vehicle_length(equipment: Iterable[PermittedEquipment]) -> float:
    """Longest permitted vehicle on a site; tents don't count. 0 when unknown."""
    longest = 0.0
    for item in equipment:
        if "tent" in item.name.strip().lower():
            continue
        longest = max(longest, item.max_length)
    return longest


def site_max_lengths(campsites: Iterable[Campsite]) -> list[SiteMaxLength]:
    return [
        SiteMaxLength(
            ridb_site_id=c.campsite_id,
            site_number=normalize_site_number(c.name),
            max_length=max_vehicle_length(c.permitted_equipment),
        )
        for c in campsites
    ]


def facility_max_length(
    facility_id: str,
    campsites: Iterable[Campsite],
    *,
    reservable: bool | None = None,
) -> FacilityMaxLength:
    """Summarize vehicle length limits for a campground.

    Args:
        facility_id: RIDB FacilityID the sites belong to.
        campsites: Raw campsites of that facility.
        reservable: Only count reservable (True) or non-reservable (False)
            sites; None counts all of them.
    """
    selected = [c for c in campsites if reservable is None or c.reservable == reservable]
    sites = site_max_lengths(selected)
    return FacilityMaxLength(
        facility_id=facility_id,
        max_length=max((s.max_length for s in sites), default=0.0),
        sites=sites,
    )
