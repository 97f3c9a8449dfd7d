"""
Tests for /api/v1/storage - binary export/import and saved animations.
"""

ALICE = {"X-Owner-Id": "alice"}
BOB = {"X-Owner-Id": "bob"}

OCTET = {"Content-Type": "application/octet-stream"}


class TestExportImport:

    def test_export_is_binary(self, client, square):
        response = client.get("/api/v1/storage/export", headers=ALICE)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/octet-stream"
        assert response.content[:4] == b"GECO"

    def test_import_into_other_owner(self, client, square):
        data = client.get("/api/v1/storage/export", headers=ALICE).content

        response = client.post("/api/v1/storage/import", headers={**BOB, **OCTET}, content=data)

        assert response.status_code == 200
        assert response.json() == {"name": "Untitled Animation", "total_frames": 100, "feature_count": 1}
        bob_doc = client.get("/api/v1/animation/document", headers=BOB).json()
        alice_doc = client.get("/api/v1/animation/document", headers=ALICE).json()
        assert bob_doc == alice_doc

    def test_bad_import_leaves_document(self, client, square):
        before = client.get("/api/v1/animation/document", headers=ALICE).json()

        response = client.post("/api/v1/storage/import", headers={**ALICE, **OCTET}, content=b"GECO\x01")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "DECODE_ERROR"
        assert client.get("/api/v1/animation/document", headers=ALICE).json() == before


class TestSavedAnimations:

    def test_save_list_load(self, client, square):
        created = client.post("/api/v1/storage/animations", headers=ALICE)
        assert created.status_code == 201
        blob_id = created.json()["blob_id"]

        listing = client.get("/api/v1/storage/animations", headers=ALICE).json()
        assert listing["count"] == 1
        assert listing["animations"][0]["blob_id"] == blob_id

        client.put("/api/v1/animation", headers=ALICE, json={"name": "changed"})
        loaded = client.post(f"/api/v1/storage/animations/{blob_id}/load", headers=ALICE)

        assert loaded.status_code == 200
        assert loaded.json()["name"] == "Untitled Animation"

    def test_download_bytes(self, client, square):
        blob_id = client.post("/api/v1/storage/animations", headers=ALICE).json()["blob_id"]
        exported = client.get("/api/v1/storage/export", headers=ALICE).content

        response = client.get(f"/api/v1/storage/animations/{blob_id}", headers=ALICE)

        assert response.status_code == 200
        assert response.content == exported

    def test_other_owner_cannot_read(self, client, square):
        blob_id = client.post("/api/v1/storage/animations", headers=ALICE).json()["blob_id"]

        response = client.get(f"/api/v1/storage/animations/{blob_id}", headers=BOB)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "BLOB_NOT_FOUND"
        assert client.get("/api/v1/storage/animations", headers=BOB).json()["count"] == 0

    def test_raw_save_validates(self, client):
        response = client.post("/api/v1/storage/animations/raw", headers={**ALICE, **OCTET}, content=b"junk")

        assert response.status_code == 400
        assert client.get("/api/v1/storage/animations", headers=ALICE).json()["count"] == 0

    def test_raw_save(self, client, square):
        data = client.get("/api/v1/storage/export", headers=ALICE).content

        response = client.post("/api/v1/storage/animations/raw", headers={**BOB, **OCTET}, content=data)

        assert response.status_code == 201
        assert client.get("/api/v1/storage/animations", headers=BOB).json()["count"] == 1

    def test_too_large(self, services, client, square):
        services.storage.store.max_blob_bytes = 8

        response = client.post("/api/v1/storage/animations", headers=ALICE)

        assert response.status_code == 413
        assert response.json()["error"]["code"] == "BLOB_TOO_LARGE"
