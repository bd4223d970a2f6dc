import random
import threading

import pytest

from conftest import make_dish


def test_add_same_dish_twice_merges_into_one_line(cart):
    dish = make_dish()
    cart.add(dish)
    cart.add(dish)
    lines = cart.lines()
    assert len(lines) == 1
    assert lines[0].quantity == 2


def test_new_lines_append_in_order(cart):
    cart.add(make_dish("a"))
    cart.add(make_dish("b"))
    cart.add(make_dish("a"))
    assert [l.dish_id for l in cart.lines()] == ["a", "b"]


def test_line_keeps_snapshot_of_dish(cart):
    dish = make_dish(price=100)
    cart.add(dish)
    # a later edit of the dish is a new object; the cart keeps the old one
    edited = make_dish(price=500)
    assert cart.lines()[0].dish.price == 100
    assert edited.price == 500
    assert cart.total() == 100


def test_update_quantity_clamps_and_removes(cart):
    dish = make_dish()
    for _ in range(3):
        cart.add(dish)
    assert cart.update_quantity("d1", -999) == 0
    assert cart.lines() == []
    assert cart.count() == 0


def test_update_quantity_in_place(cart):
    cart.add(make_dish())
    assert cart.update_quantity("d1", 4) == 5
    assert cart.update_quantity("d1", -1) == 4
    assert cart.quantity_of("d1") == 4


def test_update_unknown_id_is_noop(cart):
    cart.add(make_dish())
    assert cart.update_quantity("nope", 3) == 0
    assert cart.count() == 1


def test_empty_cart_totals(cart):
    assert cart.total() == 0
    assert cart.count() == 0
    bill = cart.bill()
    assert bill.item_total == 0
    assert bill.grand_total == 0


def test_bill_is_derived_from_lines(cart):
    cart.add(make_dish("a", price=199))
    cart.add(make_dish("b", price=50))
    cart.add(make_dish("b", price=50))
    bill = cart.bill()
    assert cart.total() == pytest.approx(299)
    assert bill.tax == pytest.approx(299 * 0.05)
    assert bill.delivery == 0
    assert bill.grand_total == pytest.approx(299 * 1.05)
    cart.update_quantity("b", -1)
    assert cart.bill().item_total == pytest.approx(249)


def test_random_sequences_never_leave_nonpositive_lines(cart):
    rng = random.Random(7)
    dishes = [make_dish(f"d{i}", price=10 * (i + 1)) for i in range(4)]
    for _ in range(500):
        dish = rng.choice(dishes)
        if rng.random() < 0.5:
            cart.add(dish)
        else:
            cart.update_quantity(dish.id, rng.randint(-4, 3))
        lines = cart.lines()
        assert all(l.quantity >= 1 for l in lines)
        assert len({l.dish_id for l in lines}) == len(lines)
        assert cart.total() == pytest.approx(sum(l.dish.price * l.quantity for l in lines))
        assert cart.bill().grand_total == pytest.approx(cart.total() * 1.05)


def test_summarize_and_checkout_leave_cart(cart):
    cart.add(make_dish("a", title="Veg Burger", price=199))
    cart.add(make_dish("a", title="Veg Burger", price=199))
    text, total = cart.summarize()
    assert text == "2× Veg Burger"
    assert total == 398
    bill = cart.checkout()
    assert bill.grand_total == pytest.approx(398 * 1.05)
    assert cart.count() == 2


def test_clear_empties_cart(cart):
    cart.add(make_dish("a"))
    cart.add(make_dish("b"))
    cart.clear()
    assert cart.lines() == []
    assert cart.bill().grand_total == 0


def test_concurrent_adds_keep_one_line_per_dish(cart):
    dish = make_dish()
    workers = 16
    barrier = threading.Barrier(workers)

    def add_many():
        barrier.wait()
        for _ in range(50):
            cart.add(dish)

    threads = [threading.Thread(target=add_many) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    lines = cart.lines()
    assert len(lines) == 1
    assert lines[0].quantity == workers * 50
