from datetime import datetime, timezone

from collector_editions.data.models import Order
from collector_editions.resolver import annotate_line_items, deduplicate_line_items


def item(line_item_id, product_id=None, edition_number=None, **extra):
    return {
        "line_item_id": line_item_id,
        "product_id": product_id,
        "edition_number": edition_number,
        "status": "active",
        "restocked": False,
        "refund_status": "none",
        "fulfillment_status": "fulfilled",
        **extra,
    }


def order(id, processed_at, *items, financial_status="paid", fulfillment_status="fulfilled"):
    return Order.model_validate({
        "id": id,
        "order_name": f"#{id}",
        "processed_at": processed_at,
        "financial_status": financial_status,
        "fulfillment_status": fulfillment_status,
        "line_items": list(items),
    })


T1 = "2024-01-01T00:00:00Z"
T2 = "2024-02-01T00:00:00Z"
T3 = "2024-03-01T00:00:00Z"


def test_items_carry_order_context():
    out = deduplicate_line_items([order("1", T1, item("A1"), financial_status="partially_refunded")])

    assert len(out) == 1
    assert out[0].processed_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert out[0].order_financial_status == "partially_refunded"
    assert out[0].order_fulfillment_status == "fulfilled"
    # the line item keeps its own fulfillment status alongside the order's
    assert out[0].fulfillment_status == "fulfilled"


def test_same_line_item_id_newer_order_wins():
    older = order("1", T1, item("A1", "P", 3))
    newer = order("2", T2, item("A1", "P", 3), financial_status="refunded")

    for orders in ([older, newer], [newer, older]):
        out = deduplicate_line_items(orders)
        assert [i.line_item_id for i in out] == ["A1"]
        assert out[0].processed_at == datetime(2024, 2, 1, tzinfo=timezone.utc)
        assert out[0].order_financial_status == "refunded"


def test_same_line_item_id_without_edition_newer_order_wins():
    out = deduplicate_line_items([order("1", T2, item("A1")), order("2", T1, item("A1"))])

    assert len(out) == 1
    assert out[0].processed_at == datetime(2024, 2, 1, tzinfo=timezone.utc)


def test_same_line_item_id_tie_keeps_first_seen():
    first = order("1", T1, item("A1", "P", 3, name="first"))
    second = order("2", T1, item("A1", "P", 3, name="second"))

    out = deduplicate_line_items([first, second])

    assert len(out) == 1
    assert out[0].name == "first"


def test_cross_key_supersession_newer_claim_wins():
    a = order("1", T1, item("A1", "P", 3))
    b = order("2", T2, item("B1", "P", 3))

    for orders in ([a, b], [b, a]):
        out = deduplicate_line_items(orders)
        assert [i.line_item_id for i in out] == ["B1"]


def test_cross_key_tie_keeps_first_claim():
    a = order("1", T1, item("A1", "P", 3))
    b = order("2", T1, item("B1", "P", 3))

    assert [i.line_item_id for i in deduplicate_line_items([a, b])] == ["A1"]
    assert [i.line_item_id for i in deduplicate_line_items([b, a])] == ["B1"]


def test_items_without_full_edition_key_skip_secondary_dedup():
    orders = [
        order("1", T1, item("A1", "P", None), item("A2", None, 3)),
        order("2", T2, item("B1", "P", None), item("B2", None, 3)),
    ]

    assert [i.line_item_id for i in deduplicate_line_items(orders)] == ["A1", "A2", "B1", "B2"]


def test_distinct_editions_of_same_product_survive():
    orders = [order("1", T1, item("A1", "P", 1), item("A2", "P", 2)), order("2", T2, item("B1", "P", 3))]

    assert [i.line_item_id for i in deduplicate_line_items(orders)] == ["A1", "A2", "B1"]


def test_insertion_order_preserved_for_survivors():
    orders = [
        order("1", T1, item("A1", "P", 1), item("A2", "Q", 1)),
        order("2", T3, item("C1", "R", 1)),
        order("3", T2, item("B1", "P", 1)),
    ]

    assert [i.line_item_id for i in deduplicate_line_items(orders)] == ["A2", "C1", "B1"]


def test_extra_fields_pass_through():
    out = deduplicate_line_items([order("1", T1, item("A1", "P", 1, name="Night Garden", edition_total=50))])

    dumped = out[0].model_dump()
    assert dumped["name"] == "Night Garden"
    assert dumped["edition_total"] == 50


def test_input_orders_not_mutated():
    orders = [order("1", T1, item("A1", "P", 3)), order("2", T2, item("B1", "P", 3))]
    before = [o.model_dump() for o in orders]

    deduplicate_line_items(orders)

    assert [o.model_dump() for o in orders] == before


def test_annotate_line_items_keeps_every_record():
    orders = [order("1", T1, item("A1", "P", 3)), order("2", T2, item("A1", "P", 3), item("B1", "P", 3))]

    assert [i.line_item_id for i in annotate_line_items(orders)] == ["A1", "A1", "B1"]


def test_empty_input():
    assert deduplicate_line_items([]) == []
    assert deduplicate_line_items([order("1", T1)]) == []
