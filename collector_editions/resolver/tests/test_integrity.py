from collector_editions.data.models import CollectorEdition
from collector_editions.resolver import find_integrity_issues


def edition(line_item_id, product_id="P", edition_number=None, **overrides):
    fields = {
        "line_item_id": line_item_id,
        "product_id": product_id,
        "edition_number": edition_number,
        "status": "active",
        "restocked": False,
        "refund_status": "none",
        "processed_at": "2024-01-01T00:00:00Z",
        "order_financial_status": "paid",
    }
    fields.update(overrides)
    return CollectorEdition.model_validate(fields)


def test_clean_items_have_no_issues():
    assert find_integrity_issues([edition("1", edition_number=1), edition("2", edition_number=2)]) == []


def test_refunded_but_active():
    issues = find_integrity_issues([edition("1", refund_status="refunded")])

    assert [(i.type, i.line_item_id, i.severity) for i in issues] == [("refunded_but_active", "1", "critical")]
    assert "refund_status='refunded'" in issues[0].description


def test_restocked_and_refunded_order_reported_as_mismatch():
    issues = find_integrity_issues([
        edition("1", restocked=True),
        edition("2", order_financial_status="voided"),
    ])

    assert [(i.type, i.line_item_id) for i in issues] == [("status_mismatch", "1"), ("status_mismatch", "2")]
    assert "order is voided" in issues[1].description


def test_inactive_items_are_not_flagged():
    items = [
        edition("1", status="inactive", refund_status="refunded", restocked=True, edition_number=4),
        edition("2", status="inactive", edition_number=4),
    ]

    assert find_integrity_issues(items) == []


def test_duplicate_edition():
    items = [edition("1", edition_number=7), edition("2", edition_number=7), edition("3", "Q", 7)]

    issues = find_integrity_issues(items)

    assert len(issues) == 1
    assert issues[0].type == "duplicate_edition"
    assert (issues[0].product_id, issues[0].edition_number) == ("P", 7)
    assert issues[0].description == "Edition #7 assigned to 2 line items: 1, 2"


def test_duplicate_check_can_be_disabled():
    items = [edition("1", edition_number=7), edition("2", edition_number=7)]

    assert find_integrity_issues(items, check_duplicates=False) == []
