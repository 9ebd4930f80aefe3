# tests/test_banners.py
import pytest
from fastapi import HTTPException
from sqlalchemy.exc import OperationalError

from app.models.banner import HeroBanner
from app.routers import banners as banners_router
from app.services.banner_service import resolve_link

API = "/api/v1/banners"
PNG = ("summer.png", b"png-bytes", "image/png")


def test_resolve_link():
    assert resolve_link(" https://shop.lk/sale ", "anker", None, True) == "https://shop.lk/sale"
    assert resolve_link(None, "anker", "Speaker", False) == "/brand/anker"
    assert resolve_link(None, None, "Power Bank", False) == "/products/Power Bank"
    with pytest.raises(HTTPException):
        resolve_link("  ", None, None, True)
    with pytest.raises(HTTPException):
        resolve_link("/custom", None, None, False)


def test_create_with_custom_url(client, auth, storage):
    res = client.post(
        API,
        headers=auth,
        files={"image": PNG},
        data={"link_url": "/sale", "custom_url_added": "true"},
    )
    assert res.status_code == 201, res.text
    body = res.json()
    assert body["link_url"] == "/sale"
    assert body["custom_url_added"] is True

    [name] = storage.objects["banner"]
    assert name.startswith("banner-") and name.endswith("-summer.png")
    assert body["image_url"].endswith(f"/banner/{name}")


def test_create_with_category_link(client, auth, storage):
    res = client.post(API, headers=auth, files={"image": PNG}, data={"category": "Speaker"})
    assert res.status_code == 201
    assert res.json()["link_url"] == "/products/Speaker"
    assert res.json()["category"] == "Speaker"


def test_create_without_link_uploads_nothing(client, auth, storage):
    res = client.post(API, headers=auth, files={"image": PNG}, data={"custom_url_added": "true"})
    assert res.status_code == 400
    assert storage.objects.get("banner", {}) == {}


def test_create_rejects_non_image(client, auth, storage):
    res = client.post(
        API,
        headers=auth,
        files={"image": ("a.pdf", b"%PDF", "application/pdf")},
        data={"brand": "jbl"},
    )
    assert res.status_code == 400


def test_failed_insert_removes_uploaded_image(client, auth, storage, monkeypatch):
    def broken_create(session, banner):
        raise OperationalError("INSERT", {}, Exception("db down"))

    monkeypatch.setattr(banners_router.service.repo, "create", broken_create)

    res = client.post(API, headers=auth, files={"image": PNG}, data={"brand": "jbl"})
    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to insert banner"
    assert storage.objects["banner"] == {}


def test_list_hides_deleted(client, auth, make_banner):
    live = make_banner("banner-1-a.jpg")
    make_banner("banner-2-b.jpg", is_deleted=True)

    res = client.get(API, headers=auth)
    assert [b["id"] for b in res.json()] == [str(live.id)]


def test_update_replaces_image(client, auth, storage, make_banner):
    banner = make_banner("banner-1-old.jpg")

    res = client.put(
        f"{API}/{banner.id}",
        headers=auth,
        files={"image": PNG},
        data={"brand": "baseus"},
    )
    assert res.status_code == 200, res.text
    body = res.json()
    assert body["link_url"] == "/brand/baseus"
    assert "banner-1-old.jpg" not in storage.objects["banner"]
    [new_name] = storage.objects["banner"]
    assert body["image_url"].endswith(new_name)


def test_update_survives_failed_storage_delete(client, auth, storage, make_banner):
    banner = make_banner("banner-1-old.jpg")
    old_url = banner.image_url
    storage.fail_removes = True

    res = client.put(f"{API}/{banner.id}", headers=auth, files={"image": PNG}, data={"brand": "jbl"})
    assert res.status_code == 200
    assert storage.remove_calls == [("banner", ["banner-1-old.jpg"])]
    assert res.json()["image_url"] != old_url


def test_update_without_image_keeps_url(client, auth, storage, make_banner):
    banner = make_banner()
    old_url = banner.image_url

    res = client.put(
        f"{API}/{banner.id}",
        headers=auth,
        data={"link_url": "/deals", "custom_url_added": "true"},
    )
    assert res.status_code == 200
    assert res.json()["image_url"] == old_url
    assert res.json()["link_url"] == "/deals"
    assert storage.remove_calls == []


def test_delete_soft_deletes_and_removes_image(client, auth, session, storage, make_banner):
    banner = make_banner("banner-1-old.jpg")

    res = client.delete(f"{API}/{banner.id}", headers=auth)
    assert res.status_code == 204
    assert storage.objects["banner"] == {}
    assert client.get(API, headers=auth).json() == []

    session.expire_all()
    assert session.get(HeroBanner, banner.id).is_deleted is True


def test_delete_survives_failed_storage_delete(client, auth, storage, make_banner):
    banner = make_banner()
    storage.fail_removes = True

    assert client.delete(f"{API}/{banner.id}", headers=auth).status_code == 204
    assert client.get(API, headers=auth).json() == []
    assert client.delete(f"{API}/{banner.id}", headers=auth).status_code == 404


def test_list_sees_banners_written_outside_the_api(client, auth, session, make_banner):
    old = make_banner("banner-1-a.jpg")
    assert len(client.get(API, headers=auth).json()) == 1

    new = make_banner("banner-2-b.jpg")
    old.is_deleted = True
    session.add(old)
    session.commit()

    assert [b["id"] for b in client.get(API, headers=auth).json()] == [str(new.id)]
