"""
Test the v1 HTTP routes.
"""

import json


def create(test_client, name, hex_color):
    response = test_client.post("/v1/colors", json={"name": name, "hex": hex_color})
    assert response.status_code == 200
    return response.json()


class TestColorRoutes:
    """Test color endpoints."""

    def test_create_and_list(self, test_client):
        body = create(test_client, "Indigo", "#6366f1")
        assert body["created"] is True
        assert body["color"]["hex"] == "#6366F1"
        assert body["color"]["isFavorite"] is False

        response = test_client.get("/v1/colors")
        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Indigo"]

    def test_blank_name_not_created(self, test_client):
        body = create(test_client, "   ", "#abcdef")
        assert body == {"created": False, "color": None}
        assert test_client.get("/v1/colors").json() == []

    def test_invalid_hex_rejected(self, test_client):
        response = test_client.post("/v1/colors", json={"name": "Bad", "hex": "#12"})
        assert response.status_code == 422

    def test_search_and_favorites_filter(self, test_client):
        blue = create(test_client, "Ocean Blue", "#1F4E79")["color"]
        create(test_client, "Camel", "#D3B58F")
        test_client.post(f"/v1/colors/{blue['id']}/favorite")

        names = [c["name"] for c in test_client.get("/v1/colors", params={"search": "BLUE"}).json()]
        assert names == ["Ocean Blue"]

        favorites = test_client.get("/v1/colors", params={"favorites_only": True}).json()
        assert [c["id"] for c in favorites] == [blue["id"]]

    def test_toggle_rename_delete(self, test_client):
        color = create(test_client, "Navy", "#0A2A43")["color"]

        toggled = test_client.post(f"/v1/colors/{color['id']}/favorite")
        assert toggled.json()["isFavorite"] is True

        renamed = test_client.patch(f"/v1/colors/{color['id']}", json={"name": ""})
        assert renamed.status_code == 200
        assert renamed.json()["name"] == ""

        assert test_client.delete(f"/v1/colors/{color['id']}").status_code == 204
        assert test_client.delete(f"/v1/colors/{color['id']}").status_code == 404

    def test_unknown_color_404(self, test_client):
        assert test_client.post("/v1/colors/missing/favorite").status_code == 404
        assert test_client.patch("/v1/colors/missing", json={"name": "x"}).status_code == 404

    def test_clear_requires_confirmation(self, test_client):
        create(test_client, "A", "#111111")
        assert test_client.delete("/v1/colors").status_code == 400
        assert len(test_client.get("/v1/colors").json()) == 1

        assert test_client.delete("/v1/colors", params={"confirm": True}).status_code == 204
        assert test_client.get("/v1/colors").json() == []

    def test_generated_batch(self, test_client):
        batch = [{
            "id": "g1", "name": "Generated", "hex": "#ABCDEF",
            "rgb": {"r": 171, "g": 205, "b": 239}, "hsl": {"h": 210, "s": 0.68, "l": 0.8},
            "isFavorite": False, "createdAt": "2026-01-01T00:00:00Z",
        }]
        response = test_client.post("/v1/colors/generated", json=batch)
        assert response.status_code == 200
        assert test_client.get("/v1/colors").json()[0]["id"] == "g1"

    def test_picker_change(self, test_client):
        response = test_client.put("/v1/picker", json={"hex": "2d7560", "target": "draft"})
        assert response.status_code == 200
        assert response.json()["draft"] == "#2D7560"

        body = test_client.post("/v1/colors", json={"name": "Teal"}).json()
        assert body["color"]["hex"] == "#2D7560"


class TestCombinationRoutes:
    """Test combination endpoints."""

    def test_combine_and_history(self, test_client):
        response = test_client.post("/v1/combinations", json={"color1": "#000000", "color2": "#ffffff"})
        assert response.status_code == 200
        assert response.json()["result"] == "#808080"
        assert response.json()["name"] == ""

        history = test_client.get("/v1/combinations").json()
        assert len(history) == 1

    def test_rename_and_delete_by_position(self, test_client):
        for hex_color in ["#000000", "#111111", "#222222"]:
            test_client.post("/v1/combinations", json={"color1": hex_color, "color2": hex_color})
        second = test_client.get("/v1/combinations").json()[1]

        renamed = test_client.patch("/v1/combinations/1", json={"name": "Dark"})
        assert renamed.json()["name"] == "Dark"

        assert test_client.delete("/v1/combinations/0").status_code == 204
        first = test_client.get("/v1/combinations").json()[0]
        assert first["id"] == second["id"]
        assert first["name"] == "Dark"

        assert test_client.delete("/v1/combinations/9").status_code == 404
        assert test_client.patch("/v1/combinations/9", json={"name": "x"}).status_code == 404

    def test_rename_and_delete_by_id(self, test_client):
        record = test_client.post("/v1/combinations", json={"color1": "#000000", "color2": "#FFFFFF"}).json()
        test_client.post("/v1/combinations", json={"color1": "#111111", "color2": "#222222"})

        renamed = test_client.patch(f"/v1/combinations/by-id/{record['id']}", json={"name": "Grey"})
        assert renamed.status_code == 200
        assert renamed.json()["name"] == "Grey"

        assert test_client.delete(f"/v1/combinations/by-id/{record['id']}").status_code == 204
        assert test_client.delete(f"/v1/combinations/by-id/{record['id']}").status_code == 404


class TestImportExportRoutes:
    """Test export download and import upload."""

    def test_export_download(self, test_client):
        create(test_client, "A", "#111111")
        response = test_client.get("/v1/export")
        assert response.status_code == 200
        assert "color-palette.json" in response.headers["content-disposition"]
        document = json.loads(response.text)
        assert [c["name"] for c in document["colors"]] == ["A"]
        assert document["palettes"] == []

    def test_import_roundtrip(self, test_client):
        create(test_client, "A", "#111111")
        create(test_client, "B", "#222222")
        exported = test_client.get("/v1/export").text
        test_client.delete("/v1/colors", params={"confirm": True})

        response = test_client.post("/v1/import", content=exported)
        assert response.status_code == 200
        assert response.json() == {
            "colors_replaced": True,
            "palettes_replaced": True,
            "color_count": 2,
            "palette_count": 0,
        }
        assert test_client.get("/v1/export").text == exported

    def test_malformed_import(self, test_client):
        create(test_client, "A", "#111111")
        response = test_client.post("/v1/import", content="{nope")
        assert response.status_code == 400
        assert response.json()["detail"].startswith("MalformedDocument")
        assert len(test_client.get("/v1/colors").json()) == 1
