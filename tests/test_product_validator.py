import re

from petflow.ai.product_validator import (
    extract_json_object,
    fallback_product_info,
    generate_sku,
    safe_number,
    sanitize_string,
    validate_product_info,
)


def test_extract_plain_json():
    assert extract_json_object('{"name": "Ball"}') == {"name": "Ball"}


def test_extract_from_code_fence():
    text = 'Sure!\n```json\n{"name": "Ball", "tags": ["toy"]}\n```'
    assert extract_json_object(text) == {"name": "Ball", "tags": ["toy"]}


def test_extract_ignores_braces_inside_strings():
    text = 'Result: {"description": "Fits {small} dogs", "unit": "un"} done'
    assert extract_json_object(text) == {"description": "Fits {small} dogs", "unit": "un"}


def test_extract_skips_broken_objects():
    text = "{not json} then {\"ok\": true}"
    assert extract_json_object(text) == {"ok": True}


def test_extract_returns_none_without_object():
    assert extract_json_object("I could not find that product.") is None
    assert extract_json_object("") is None
    assert extract_json_object(None) is None
    assert extract_json_object("[1, 2, 3]") is None


def test_safe_number():
    assert safe_number("89,90") == 89.9
    assert safe_number(" 12 ") == 12.0
    assert safe_number(7) == 7.0
    assert safe_number("abc") is None
    assert safe_number("NaN") is None
    assert safe_number(float("inf")) is None
    assert safe_number(True) is None
    assert safe_number(None) is None


def test_sanitize_string():
    assert sanitize_string("  Ball\x00 toy\x07 ") == "Ball toy"
    assert sanitize_string("line1\nline2", keep_newlines=True) == "line1\nline2"
    assert sanitize_string("line1\nline2") == "line1line2"
    assert sanitize_string("x" * 600) == "x" * 500
    assert sanitize_string(42) == ""


def test_generate_sku_shape():
    sku = generate_sku("Ração Premium", "Food")
    assert re.fullmatch(r"FOO-RACA-[A-Z0-9]{4}", sku)

    assert re.fullmatch(r"PET-ITEM-[A-Z0-9]{4}", generate_sku("", None))


def test_fallback_is_complete():
    info = fallback_product_info("Bola de borracha")
    assert info.ai_generated is False
    assert info.name == "Bola de borracha"
    assert info.category == "Other"
    assert info.brand == "Generic"
    assert info.sku
    assert info.tags == ["Bola", "de", "borracha"]
    assert info.min_stock == 5


def test_malformed_payload_still_yields_usable_record():
    info = validate_product_info(
        {
            "sku": "",
            "category": None,
            "tags": 5,
            "suggestedPrice": "abc",
            "costPrice": -3,
            "minStock": "NaN",
            "description": "short",
        },
        "Coleira Antipulgas",
    )

    assert info.sku
    assert info.category == "Other"
    assert len(info.tags) >= 1
    assert info.suggested_price is None
    assert info.cost_price is None
    assert info.min_stock == 5
    assert info.description == "Coleira Antipulgas - details not available"


def test_portuguese_keys_are_accepted():
    info = validate_product_info(
        {
            "descricao": "Ração completa para cães adultos de porte grande",
            "precoSugerido": "189,90",
            "marca": "Golden",
            "categoria": "Food",
            "unidade": "kg",
            "tags": "ração, cães, premium",
            "targetAnimals": "dog",
        },
        "Ração Golden 15kg",
    )

    assert info.ai_generated is True
    assert info.suggested_price == 189.9
    assert info.brand == "Golden"
    assert info.category == "Food"
    assert info.unit == "kg"
    assert info.tags == ["ração", "cães", "premium"]
    assert info.target_animals == "dog"
    assert info.sku.startswith("FOO-RACA-")


def test_sku_from_model_is_normalized():
    info = validate_product_info({"sku": "toy ball 01"}, "Ball")
    assert info.sku == "TOY-BALL-01"


def test_non_object_payload_falls_back():
    info = validate_product_info(["not", "a", "dict"], "Ball", category="Toys", brand="Kong")
    assert info.ai_generated is False
    assert info.category == "Toys"
    assert info.brand == "Kong"
