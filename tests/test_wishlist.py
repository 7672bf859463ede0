async def toggle(market, user, item_id):
    return await market.client.post(
        "/wishlist/toggle", json={"item_id": item_id}, headers=market.headers(user)
    )


async def test_toggle_adds_then_removes(market):
    seller = await market.signup("seller")
    alice = await market.signup("alice")
    item_id = await market.list_item(seller)

    added = await toggle(market, alice, item_id)
    assert added.json() == {"message": "Added to wishlist", "removed": False}
    ids = await market.client.get("/wishlist/", headers=market.headers(alice))
    assert ids.json() == [item_id]

    removed = await toggle(market, alice, item_id)
    assert removed.json() == {"message": "Removed from wishlist", "removed": True}
    ids = await market.client.get("/wishlist/", headers=market.headers(alice))
    assert ids.json() == []


async def test_unknown_item_cannot_be_wishlisted(market):
    alice = await market.signup("alice")
    resp = await toggle(market, alice, 31337)
    assert resp.status_code == 404


async def test_wishlist_items_skip_sold_items(market):
    seller = await market.signup("seller", city="Delhi")
    alice = await market.signup("alice")
    bob = await market.signup("bob")
    kept = await market.list_item(seller, name="Chair")
    gone = await market.list_item(seller, name="Table")
    await toggle(market, alice, kept)
    await toggle(market, alice, gone)
    await market.pay(bob, await market.order(bob, gone))

    resp = await market.client.get("/wishlist/items", headers=market.headers(alice))

    rows = resp.json()
    assert [row["name"] for row in rows] == ["Chair"]
    assert rows[0]["seller_city"] == "Delhi"
    assert rows[0]["added_to_wishlist"] is not None
