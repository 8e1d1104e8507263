import random
from datetime import date, timedelta
from decimal import Decimal

from core.domain import Category, YearMonth
from core.functional import Nothing, Some
from core.ledger import Ledger


def make_ledger():
    ledger = Ledger()
    ledger.add(date(2024, 1, 5), Decimal("50.0"), Category.FOOD, "lunch")
    ledger.add(date(2024, 1, 6), Decimal("12.5"), Category.FOOD, "coffee")
    ledger.add(date(2024, 2, 1), Decimal("900"), Category.BILLS, "rent")
    ledger.add(date(2024, 1, 5), Decimal("3"), Category.TRANSPORT, "bus")
    return ledger


def check_invariants(ledger: Ledger):
    live = {t.id: t for t in ledger.all()}
    by_cat = [t for c in Category for t in ledger.by_category(c)]

    assert len(live) == len(ledger)
    assert sorted(live) == sorted(t.id for t in by_cat)
    assert len(by_cat) == len({t.id for t in by_cat})

    for c, total in ledger.category_summary():
        assert total == sum((t.amount for t in live.values() if t.category == c), Decimal("0"))
    for ym, total in ledger.monthly_summary():
        assert total == sum((t.amount for t in live.values() if t.year_month == ym), Decimal("0"))

    dates = [t.date for t in ledger.all()]
    assert dates == sorted(dates)


def test_add_returns_first_id_and_updates_totals():
    ledger = Ledger()
    t = ledger.add(date(2024, 1, 5), Decimal("50.0"), Category.FOOD, "lunch")

    assert t.id == 1
    assert dict(ledger.category_summary())[Category.FOOD] == Decimal("50.0")
    assert dict(ledger.monthly_summary())[YearMonth(2024, 1)] == Decimal("50.0")


def test_date_range_is_inclusive_single_day():
    ledger = Ledger()
    first = ledger.add(date(2024, 1, 5), Decimal("10"), Category.FOOD)
    ledger.add(date(2024, 1, 6), Decimal("20"), Category.FOOD)

    assert list(ledger.by_date_range(date(2024, 1, 5), date(2024, 1, 5))) == [first]


def test_date_range_spans_buckets_in_order():
    ledger = make_ledger()
    ids = [t.id for t in ledger.by_date_range(date(2024, 1, 1), date(2024, 1, 31))]
    assert ids == [1, 4, 2]


def test_date_range_reversed_or_empty_yields_nothing():
    ledger = make_ledger()
    assert list(ledger.by_date_range(date(2024, 2, 1), date(2024, 1, 1))) == []
    assert list(ledger.by_date_range(date(2023, 1, 1), date(2023, 12, 31))) == []


def test_delete_restores_category_total_to_zero():
    ledger = Ledger()
    t = ledger.add(date(2024, 3, 1), Decimal("30"), Category.TRANSPORT)

    result = ledger.delete_by_id(1)

    assert result == Some(t)
    assert ledger.category_total(Category.TRANSPORT) == 0
    assert Category.TRANSPORT in dict(ledger.category_summary())
    assert list(ledger.all()) == []
    assert ledger.is_empty()


def test_delete_keeps_zeroed_month():
    ledger = Ledger()
    ledger.add(date(2024, 3, 1), Decimal("30"), Category.TRANSPORT)
    ledger.delete_by_id(1)

    assert list(ledger.monthly_summary()) == [(YearMonth(2024, 3), Decimal("0"))]


def test_delete_missing_id_on_empty_ledger():
    ledger = Ledger()
    assert ledger.delete_by_id(999) == Nothing()
    assert len(ledger) == 0
    assert list(ledger.monthly_summary()) == []
    assert all(total == 0 for _, total in ledger.category_summary())


def test_delete_missing_id_changes_nothing():
    ledger = make_ledger()
    before = (
        list(ledger.all()),
        list(ledger.monthly_summary()),
        list(ledger.category_summary()),
        {c: list(ledger.by_category(c)) for c in Category},
    )

    assert ledger.delete_by_id(42).is_none()

    after = (
        list(ledger.all()),
        list(ledger.monthly_summary()),
        list(ledger.category_summary()),
        {c: list(ledger.by_category(c)) for c in Category},
    )
    assert before == after


def test_delete_removes_the_identical_record_only():
    ledger = Ledger()
    a = ledger.add(date(2024, 1, 1), Decimal("5"), Category.FOOD, "same")
    b = ledger.add(date(2024, 1, 1), Decimal("5"), Category.FOOD, "same")

    ledger.delete_by_id(b.id)

    assert list(ledger.all()) == [a]
    assert list(ledger.by_category(Category.FOOD)) == [a]


def test_ids_never_reused():
    ledger = make_ledger()
    ledger.delete_by_id(4)
    ledger.delete_by_id(3)

    new_ids = [ledger.add(date(2024, 5, 1), Decimal("1"), Category.OTHER).id for _ in range(3)]
    assert new_ids == [5, 6, 7]


def test_all_orders_by_date_then_insertion():
    ledger = Ledger()
    ledger.add(date(2024, 2, 1), Decimal("1"), Category.FOOD)
    ledger.add(date(2024, 1, 1), Decimal("1"), Category.FOOD)
    ledger.add(date(2024, 2, 1), Decimal("1"), Category.FOOD)
    ledger.add(date(2023, 12, 31), Decimal("1"), Category.FOOD)

    assert [t.id for t in ledger.all()] == [4, 2, 1, 3]


def test_all_is_restartable():
    ledger = make_ledger()
    assert list(ledger.all()) == list(ledger.all())


def test_category_summary_lists_every_category_in_order():
    ledger = Ledger()
    assert [c for c, _ in ledger.category_summary()] == list(Category)
    assert [str(c) for c in Category] == [
        "FOOD", "TRANSPORT", "BILLS", "ENTERTAINMENT", "SHOPPING", "OTHER",
    ]


def test_negative_amounts_net_out():
    ledger = Ledger()
    ledger.add(date(2024, 4, 2), Decimal("40"), Category.SHOPPING, "shoes")
    ledger.add(date(2024, 4, 9), Decimal("-40"), Category.SHOPPING, "refund")

    assert ledger.category_total(Category.SHOPPING) == 0
    assert ledger.monthly_total(YearMonth(2024, 4)) == 0
    assert len(list(ledger.by_category(Category.SHOPPING))) == 2


def test_empty_date_bucket_is_dropped():
    ledger = make_ledger()
    ledger.delete_by_id(3)

    assert list(ledger.by_date_range(date(2024, 2, 1), date(2024, 2, 1))) == []
    assert YearMonth(2024, 2) in dict(ledger.monthly_summary())


def test_get_and_contains():
    ledger = make_ledger()
    assert ledger.get(2).map(lambda t: t.note) == Some("coffee")
    assert ledger.get(99) == Nothing()
    assert 2 in ledger
    assert 99 not in ledger


def test_float_amount_is_stored_as_decimal():
    ledger = Ledger()
    t = ledger.add(date(2024, 1, 1), 0.1, Category.OTHER)
    assert t.amount == Decimal("0.1")


def test_invariants_hold_under_random_operations():
    rng = random.Random(7)
    ledger = Ledger()
    issued = []
    start = date(2024, 1, 1)

    for _ in range(300):
        if issued and rng.random() < 0.4:
            tx_id = rng.choice(issued + [10_000])
            result = ledger.delete_by_id(tx_id)
            assert result.is_some() == (tx_id in issued)
            if tx_id in issued:
                issued.remove(tx_id)
        else:
            t = ledger.add(
                start + timedelta(days=rng.randrange(120)),
                Decimal(rng.randrange(-5000, 5000)) / 100,
                rng.choice(list(Category)),
            )
            issued.append(t.id)
        check_invariants(ledger)

    assert sorted(t.id for t in ledger.all()) == sorted(issued)
