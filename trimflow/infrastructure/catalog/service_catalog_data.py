from __future__ import annotations

from decimal import Decimal

from trimflow.domain.entities.service import Service

SERVICE_CATALOG: dict[str, Service] = {
    "classic_cut": Service(
        id="classic_cut",
        name="Classic Cut",
        description="Scissor and clipper cut, finished with a neck shave.",
        duration_minutes=30,
        price=Decimal("25"),
    ),
    "skin_fade": Service(
        id="skin_fade",
        name="Skin Fade",
        description="Fade down to the skin with a detailed line-up.",
        duration_minutes=45,
        price=Decimal("35"),
    ),
    "beard_trim": Service(
        id="beard_trim",
        name="Beard Trim",
        description="Shape and trim with hot towel finish.",
        duration_minutes=20,
        price=Decimal("15"),
    ),
    "cut_and_beard": Service(
        id="cut_and_beard",
        name="Cut & Beard",
        description="Any haircut plus a full beard sculpt.",
        duration_minutes=60,
        price=Decimal("45"),
    ),
}
