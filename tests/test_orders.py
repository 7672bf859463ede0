async def test_order_for_available_item(market):
    seller = await market.signup("seller")
    buyer = await market.signup("alice")
    item_id = await market.list_item(seller)

    resp = await market.client.post(
        "/orders/", json={"item_id": item_id}, headers=market.headers(buyer)
    )

    assert resp.status_code == 201
    assert resp.json()["message"] == "Order created successfully"
    assert (await market.item(item_id)).is_sold is False


async def test_several_orders_may_exist_for_one_unsold_item(market):
    seller = await market.signup("seller")
    item_id = await market.list_item(seller)
    first = await market.order(await market.signup("alice"), item_id)
    second = await market.order(await market.signup("bob"), item_id)

    assert first != second


async def test_order_for_missing_item_is_not_found(market):
    buyer = await market.signup("alice")

    resp = await market.client.post(
        "/orders/", json={"item_id": 4242}, headers=market.headers(buyer)
    )

    assert resp.status_code == 404
    assert resp.json()["code"] == "item_not_found"


async def test_order_for_sold_item_is_rejected(market):
    seller = await market.signup("seller")
    alice = await market.signup("alice")
    item_id = await market.list_item(seller)
    await market.pay(alice, await market.order(alice, item_id))

    resp = await market.client.post(
        "/orders/", json={"item_id": item_id}, headers=market.headers(await market.signup("bob"))
    )

    assert resp.status_code == 409
    assert resp.json() == {"detail": "Item not found or already sold", "code": "item_sold_out"}


async def test_order_detail_is_visible_to_both_parties_only(market):
    seller = await market.signup("seller")
    buyer = await market.signup("alice")
    stranger = await market.signup("mallory")
    order_id = await market.order(buyer, await market.list_item(seller, name="Desk lamp", price=25))

    for party in (buyer, seller):
        resp = await market.client.get(f"/orders/{order_id}", headers=market.headers(party))
        assert resp.status_code == 200
        body = resp.json()
        assert body["item_name"] == "Desk lamp"
        assert body["total_amount"] == 25
        assert body["buyer_name"] == "alice"
        assert body["seller_name"] == "seller"

    resp = await market.client.get(f"/orders/{order_id}", headers=market.headers(stranger))
    assert resp.status_code == 404


async def test_purchased_and_sold_lists_only_show_paid_orders(market):
    seller = await market.signup("seller")
    buyer = await market.signup("alice")
    paid_item = await market.list_item(seller, name="Guitar")
    unpaid_item = await market.list_item(seller, name="Amp")
    await market.pay(buyer, await market.order(buyer, paid_item))
    await market.order(buyer, unpaid_item)

    purchased = await market.client.get("/orders/purchased", headers=market.headers(buyer))
    sold = await market.client.get("/orders/sold", headers=market.headers(seller))

    assert [row["name"] for row in purchased.json()] == ["Guitar"]
    assert purchased.json()[0]["seller_username"] == "seller"
    assert [row["name"] for row in sold.json()] == ["Guitar"]
    assert sold.json()[0]["buyer_email"] == "alice@circula.io"


async def test_orders_require_authentication(client):
    resp = await client.get("/orders/purchased")
    assert resp.status_code == 401
