async def browse(market, user, **params):
    resp = await market.client.get("/items/", params=params, headers=market.headers(user))
    assert resp.status_code == 200
    return resp.json()


async def test_listing_an_item(market):
    seller = await market.signup("seller", city="Mumbai")
    item_id = await market.list_item(seller, name="Bookshelf", price=40)

    resp = await market.client.get(f"/items/{item_id}")

    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Bookshelf"
    assert body["is_sold"] is False
    assert body["seller_name"] == "seller"
    assert body["seller_email"] == "seller@circula.io"
    assert body["seller_city"] == "Mumbai"


async def test_price_must_be_positive(market):
    seller = await market.signup("seller")
    resp = await market.client.post(
        "/items/", json={"name": "Free stuff", "price": 0}, headers=market.headers(seller)
    )
    assert resp.status_code == 422


async def test_browse_hides_purchased_items_unless_asked(market):
    seller = await market.signup("seller")
    buyer = await market.signup("alice")
    sold_id = await market.list_item(seller, name="Camera")
    await market.list_item(seller, name="Tripod")
    await market.pay(buyer, await market.order(buyer, sold_id))

    names = [row["name"] for row in await browse(market, buyer)]
    assert names == ["Tripod"]

    everything = {row["name"]: row for row in await browse(market, buyer, show_all="true")}
    assert everything["Camera"]["is_purchased"] is True
    assert everything["Tripod"]["is_purchased"] is False


async def test_browse_by_seller(market):
    alice = await market.signup("alice")
    bob = await market.signup("bob")
    await market.list_item(alice, name="Kettle")
    await market.list_item(bob, name="Toaster")

    rows = await browse(market, alice, seller_id=bob["id"])

    assert [row["name"] for row in rows] == ["Toaster"]


async def test_unknown_item_is_not_found(client):
    resp = await client.get("/items/999")
    assert resp.status_code == 404
    assert resp.json()["code"] == "item_not_found"


async def test_only_the_seller_may_edit(market):
    seller = await market.signup("seller")
    other = await market.signup("mallory")
    item_id = await market.list_item(seller)
    update = {"name": "Road bike (new tyres)", "price": 550}

    denied = await market.client.put(f"/items/{item_id}", json=update, headers=market.headers(other))
    allowed = await market.client.put(f"/items/{item_id}", json=update, headers=market.headers(seller))

    assert denied.status_code == 403
    assert allowed.status_code == 200
    assert allowed.json()["price"] == 550


async def test_sold_item_cannot_be_edited(market):
    seller = await market.signup("seller")
    buyer = await market.signup("alice")
    item_id = await market.list_item(seller)
    await market.pay(buyer, await market.order(buyer, item_id))

    resp = await market.client.put(
        f"/items/{item_id}", json={"name": "x", "price": 1}, headers=market.headers(seller)
    )

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Cannot edit sold item"


async def test_item_with_orders_cannot_be_deleted(market):
    seller = await market.signup("seller")
    item_id = await market.list_item(seller)
    await market.order(await market.signup("alice"), item_id)

    resp = await market.client.delete(f"/items/{item_id}", headers=market.headers(seller))

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Item has associated orders"


async def test_delete_removes_item_and_wishlist_entries(market):
    seller = await market.signup("seller")
    fan = await market.signup("alice")
    item_id = await market.list_item(seller)
    await market.client.post("/wishlist/toggle", json={"item_id": item_id}, headers=market.headers(fan))

    resp = await market.client.delete(f"/items/{item_id}", headers=market.headers(seller))

    assert resp.status_code == 200
    assert await market.item(item_id) is None
    wishlist = await market.client.get("/wishlist/", headers=market.headers(fan))
    assert wishlist.json() == []


async def test_my_items_lists_unsold_listings(market):
    seller = await market.signup("seller")
    buyer = await market.signup("alice")
    sold_id = await market.list_item(seller, name="Sofa")
    await market.list_item(seller, name="Rug")
    await market.pay(buyer, await market.order(buyer, sold_id))

    resp = await market.client.get("/items/mine", headers=market.headers(seller))

    assert [row["name"] for row in resp.json()] == ["Rug"]
