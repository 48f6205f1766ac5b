def test_menu_sections(client):
    r = client.get("/menu")
    assert r.status_code == 200
    sections = r.json()["sections"]

    assert [s["key"] for s in sections] == ["registrations", "sales", "inventory", "finance"]
    for section in sections:
        assert section["report_label"]
        assert all(group["items"] for group in section["groups"])


def test_menu_marks_locked_items(client):
    sections = client.get("/menu").json()["sections"]
    locked = {
        item["label"]
        for section in sections
        for group in section["groups"]
        for item in group["items"]
        if item["locked"]
    }
    assert "Purchase suggestions" in locked
    assert "Products" not in locked
