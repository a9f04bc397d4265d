import pytest
from collector_editions.data.models import Order
from collector_editions.resolver import deduplicate_orders, is_invalidated, order_group_key


def make_order(id, order_name=None, financial_status="paid", fulfillment_status="fulfilled",
               processed_at="2024-01-01T00:00:00Z", line_items=None):
    return Order(
        id=id,
        order_name=order_name,
        processed_at=processed_at,
        financial_status=financial_status,
        fulfillment_status=fulfillment_status,
        line_items=line_items or [],
    )


@pytest.mark.parametrize("name, expected", [
    ("#1188", "1188"),
    ("1188", "1188"),
    ("1188A", "1188"),
    ("# 1188", "1188"),
    ("Gift Order", "gift order"),
    ("#KS-Backer", "ks-backer"),
])
def test_group_key_normalizes_names(name, expected):
    assert order_group_key(make_order("1", order_name=name)) == expected


@pytest.mark.parametrize("name", [None, "", "   "])
def test_group_key_falls_back_to_id(name):
    assert order_group_key(make_order("WH-77", order_name=name)) == "WH-77"


@pytest.mark.parametrize("fulfillment, financial, expected", [
    ("fulfilled", "paid", False),
    ("restocked", "paid", True),
    ("canceled", "paid", True),
    ("fulfilled", "refunded", True),
    ("fulfilled", "voided", True),
    (None, None, False),
    ("fulfilled", "partially_refunded", False),
])
def test_is_invalidated(fulfillment, financial, expected):
    order = make_order("1", fulfillment_status=fulfillment, financial_status=financial)
    assert is_invalidated(order) is expected


@pytest.mark.parametrize("reverse", [False, True])
def test_valid_native_order_beats_voided_manual_copy(reverse):
    native = make_order("5001", order_name="1188", financial_status="paid")
    manual = make_order("WH-1188", order_name="1188A", financial_status="voided")
    orders = [manual, native] if reverse else [native, manual]

    out = deduplicate_orders(orders)

    assert [o.id for o in out] == ["5001"]


def test_valid_manual_order_beats_invalidated_native_order():
    native = make_order("5001", order_name="#1188", financial_status="refunded")
    manual = make_order("WH-1188", order_name="1188A", financial_status="paid")

    assert [o.id for o in deduplicate_orders([native, manual])] == ["WH-1188"]


@pytest.mark.parametrize("reverse", [False, True])
def test_invalidated_pair_keeps_native_by_source_priority(reverse):
    native = make_order("5001", order_name="1188", financial_status="refunded")
    manual = make_order("WH-1188", order_name="1188A", fulfillment_status="canceled")
    orders = [manual, native] if reverse else [native, manual]

    assert [o.id for o in deduplicate_orders(orders)] == ["5001"]


def test_native_order_preferred_over_warehouse_copy():
    manual = make_order("WH-123", order_name="#1001", processed_at="2024-01-01T00:00:00Z")
    native = make_order("789", order_name="1001", processed_at="2024-01-02T00:00:00Z")

    out = deduplicate_orders([manual, native])

    assert len(out) == 1
    assert out[0].id == "789"


def test_tied_native_orders_keep_first_seen():
    first = make_order("100", order_name="1188")
    second = make_order("200", order_name="#1188")

    assert [o.id for o in deduplicate_orders([first, second])] == ["100"]


def test_custom_manual_prefix():
    manual = make_order("MAN-1", order_name="1188A")
    native = make_order("5001", order_name="1188")

    assert [o.id for o in deduplicate_orders([manual, native], manual_prefix="MAN-")] == ["5001"]
    # with the default prefix neither is manual, so the first one stays
    assert [o.id for o in deduplicate_orders([manual, native])] == ["MAN-1"]


def test_groups_returned_in_first_seen_order_and_input_untouched():
    orders = [
        make_order("3", order_name="#3000"),
        make_order("1", order_name="#1000"),
        make_order("WH-3", order_name="3000B"),
        make_order("2"),
    ]
    snapshot = list(orders)

    out = deduplicate_orders(orders)

    assert [o.id for o in out] == ["3", "1", "2"]
    assert orders == snapshot


def test_empty_input():
    assert deduplicate_orders([]) == []
