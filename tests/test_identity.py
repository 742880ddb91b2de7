from __future__ import annotations

from paint_vault.identity import IdentityKey, identity_key, normalize_identity
from paint_vault.models import Paint
from paint_vault.tags import InventoryStatus, PaintBrand, PaintType


def test_identity_key_ignores_descriptive_fields() -> None:
    first = Paint(brand="Vallejo", range="Game Color", manufacturer_code="72.001", type="Base", name="Dead White")
    second = Paint(
        brand="Vallejo",
        range="Game Color",
        manufacturer_code="72.001",
        type="Layer",
        name="Bone White",
        barcode="8429551720014",
    )

    assert identity_key(first) == identity_key(second)
    assert identity_key(first) == IdentityKey("Vallejo", "Game Color", "72.001")


def test_identity_key_is_exact_and_case_sensitive() -> None:
    lower = Paint(brand="Vallejo", range="game color", manufacturer_code="72.001", type="Base", name="x")
    padded = Paint(brand="Vallejo", range="Game Color ", manufacturer_code="72.001", type="Base", name="x")
    plain = Paint(brand="Vallejo", range="Game Color", manufacturer_code="72.001", type="Base", name="x")

    assert identity_key(lower) != identity_key(plain)
    assert identity_key(padded) != identity_key(plain)


def test_normalize_identity_trims_range_and_uppercases_code() -> None:
    key = normalize_identity(PaintBrand.AK_INTERACTIVE, "  3rd Gen ", " ak11187 ")

    assert key == IdentityKey("AK Interactive", "3rd Gen", "AK11187")


def test_normalize_identity_decodes_unknown_brand_text() -> None:
    assert normalize_identity("Mystery Co", "Range", "1").brand == "Other"
    assert normalize_identity("Citadel", "Base", "1").brand == "Citadel"


def test_tags_fall_back_on_unknown_labels() -> None:
    assert PaintBrand.from_label("Vallejo") is PaintBrand.VALLEJO
    assert PaintBrand.from_label("vallejo") is PaintBrand.OTHER
    assert PaintBrand.from_label(None) is PaintBrand.OTHER
    assert PaintType.from_label("Acrylic Color") is PaintType.ACRYLIC_COLOR
    assert PaintType.from_label("Ink") is PaintType.OTHER
    assert InventoryStatus.from_label("wishlist") is InventoryStatus.WISHLIST
    assert InventoryStatus.from_label("bogus") is InventoryStatus.OWNED


def test_model_tag_views_decode_stored_text() -> None:
    paint = Paint(brand="Unlisted", range="r", manufacturer_code="1", type="Wash", name="x")

    assert paint.brand_tag is PaintBrand.OTHER
    assert paint.type_tag is PaintType.OTHER
