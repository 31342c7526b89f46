from fellowpet.presentation.pricing import format_price, pricing_tables


def test_format_price_uses_indian_grouping():
    assert format_price(500) == "₹500"
    assert format_price("1500") == "₹1,500"
    assert format_price(123456) == "₹1,23,456"
    assert format_price(12345678) == "₹1,23,45,678"
    assert format_price(499.6) == "₹500"


def test_format_price_placeholders():
    assert format_price(None) == "₹—"
    assert format_price(0) == "₹—"
    assert format_price(-20) == "₹—"
    assert format_price("abc") == "₹—"
    assert format_price(True) == "₹—"


def test_pricing_tables_fill_missing_sizes():
    tables = pricing_tables(
        [
            {
                "id": "dog",
                "name": "Dog",
                "rates_daily": {"Small": "500", "Medium": 600},
                "walking_rates": {"Small": 100},
                "total_prices": {"Small": 700},
            }
        ]
    )

    (table,) = tables
    assert table["name"] == "Dog"
    assert [row["label"] for row in table["rows"]] == ["Boarding", "Walking", "Meal"]
    assert table["rows"][0]["cells"] == ["₹500", "₹600", "₹—", "₹—"]
    assert table["rows"][2]["cells"] == ["₹—"] * 4
    assert table["total"] == ["₹700", "₹—", "₹—", "₹—"]
