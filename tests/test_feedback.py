import pytest


async def test_submit_feedback(market):
    alice = await market.signup("alice")

    resp = await market.client.post(
        "/feedback/", json={"rating": 5, "message": "Smooth checkout"}, headers=market.headers(alice)
    )

    assert resp.status_code == 201
    assert resp.json()["message"] == "Feedback submitted successfully"


@pytest.mark.parametrize("rating", [0, 6])
async def test_rating_must_be_between_one_and_five(market, rating):
    alice = await market.signup("alice")

    resp = await market.client.post(
        "/feedback/", json={"rating": rating, "message": "meh"}, headers=market.headers(alice)
    )

    assert resp.status_code == 422


async def test_feedback_requires_login(client):
    resp = await client.post("/feedback/", json={"rating": 4, "message": "hi"})
    assert resp.status_code == 401
