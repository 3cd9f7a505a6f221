import pytest


@pytest.fixture
def review(client, guest, spot):
    response = client.post(
        f"/api/spots/{spot['id']}/reviews", json={"review": "Lovely stay", "stars": 5}, headers=guest["headers"]
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_create_review(client, guest, spot, review):
    assert review["spotId"] == spot["id"]
    assert review["userId"] == guest["id"]
    assert review["stars"] == 5


def test_create_review_for_missing_spot(client, guest):
    response = client.post("/api/spots/999/reviews", json={"review": "Nice", "stars": 3}, headers=guest["headers"])

    assert response.status_code == 404
    assert response.json() == {"message": "Spot couldn't be found"}


def test_create_review_validation(client, guest, spot):
    response = client.post(f"/api/spots/{spot['id']}/reviews", json={"stars": 7}, headers=guest["headers"])

    assert response.status_code == 400
    assert response.json()["errors"] == {
        "review": "Review text is required",
        "stars": "Stars must be an integer from 1 to 5",
    }


def test_second_review_by_same_user_is_rejected(client, guest, spot, review):
    response = client.post(
        f"/api/spots/{spot['id']}/reviews", json={"review": "Again", "stars": 1}, headers=guest["headers"]
    )

    assert response.status_code == 500
    assert response.json() == {"message": "User already has a review for this spot"}


def test_spot_reviews_include_user_and_images(client, guest, spot, review):
    client.post(
        f"/api/reviews/{review['id']}/images", json={"url": "https://example.com/r.jpg"}, headers=guest["headers"]
    )

    response = client.get(f"/api/spots/{spot['id']}/reviews")

    assert response.status_code == 200
    [item] = response.json()["Reviews"]
    assert item["User"] == {"id": guest["id"], "firstName": "Guest", "lastName": "Tester"}
    assert [image["url"] for image in item["ReviewImages"]] == ["https://example.com/r.jpg"]
    assert item["Spot"] is None


def test_current_user_reviews_include_spot_with_preview(client, host, guest, spot, review):
    client.post(
        f"/api/spots/{spot['id']}/images",
        json={"url": "https://example.com/front.jpg", "preview": True},
        headers=host["headers"],
    )

    response = client.get("/api/reviews/current", headers=guest["headers"])

    assert response.status_code == 200
    [item] = response.json()["Reviews"]
    assert item["Spot"]["id"] == spot["id"]
    assert item["Spot"]["previewImage"] == "https://example.com/front.jpg"
    assert "description" not in item["Spot"]


def test_update_review(client, guest, review):
    response = client.put(
        f"/api/reviews/{review['id']}", json={"review": "Even better", "stars": 4}, headers=guest["headers"]
    )

    assert response.status_code == 200
    assert response.json()["review"] == "Even better"
    assert response.json()["stars"] == 4


def test_update_review_by_other_user_is_forbidden(client, host, review):
    response = client.put(f"/api/reviews/{review['id']}", json={"review": "Hack", "stars": 1}, headers=host["headers"])

    assert response.status_code == 403
    assert response.json() == {"message": "Forbidden"}


def test_update_missing_review(client, guest):
    response = client.put("/api/reviews/999", json={"review": "Nope", "stars": 1}, headers=guest["headers"])

    assert response.status_code == 404
    assert response.json() == {"message": "Review couldn't be found"}


def test_delete_review(client, host, guest, review):
    assert client.delete(f"/api/reviews/{review['id']}", headers=host["headers"]).status_code == 403

    response = client.delete(f"/api/reviews/{review['id']}", headers=guest["headers"])

    assert response.status_code == 200
    assert response.json() == {"message": "Successfully deleted"}
    assert client.delete(f"/api/reviews/{review['id']}", headers=guest["headers"]).status_code == 404


def test_review_images_are_capped_at_ten(client, guest, review):
    for i in range(10):
        response = client.post(
            f"/api/reviews/{review['id']}/images",
            json={"url": f"https://example.com/{i}.jpg"},
            headers=guest["headers"],
        )
        assert response.status_code == 201

    response = client.post(
        f"/api/reviews/{review['id']}/images", json={"url": "https://example.com/11.jpg"}, headers=guest["headers"]
    )

    assert response.status_code == 403
    assert response.json() == {"message": "Maximum number of images for this resource was reached"}


def test_review_image_by_other_user_is_forbidden(client, host, review):
    response = client.post(
        f"/api/reviews/{review['id']}/images", json={"url": "https://example.com/x.jpg"}, headers=host["headers"]
    )

    assert response.status_code == 403
