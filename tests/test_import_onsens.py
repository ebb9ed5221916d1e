"""温泉CSVインポートのテスト"""
import logging

from onsen_api.models import Onsen, Review
from onsen_api.services.criteria import SearchCriteria
from onsen_api.services.search import search_onsens_db
from scripts.import_onsens import import_onsen_file, parse_row

CSV_TEXT = """name,description,tags,latitude,longitude
松江しんじ湖温泉,宍道湖畔の温泉街,"outdoor,露天風呂",35.4681,133.0486
玉造温泉,美肌の湯,"indoor,家族風呂",35.4690,133.0490
,名無し,outdoor,35.0,133.0
座標不明の湯,,outdoor,abc,133.0
"""


def write_csv(tmp_path, text=CSV_TEXT, name="onsens.csv"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestParseRow:
    def test_full_row(self):
        attrs = parse_row({
            "name": " 玉造温泉 ", "description": "美肌の湯", "tags": "indoor",
            "latitude": "35.4690", "longitude": "133.0490",
        })
        assert attrs == {
            "name": "玉造温泉", "description": "美肌の湯", "tags": "indoor",
            "latitude": 35.469, "longitude": 133.049,
        }

    def test_geo_lat_lng_columns(self):
        attrs = parse_row({"name": "乳頭温泉", "geo_lat": "40.0", "geo_lng": "140.0"})
        assert (attrs["latitude"], attrs["longitude"]) == (40.0, 140.0)

    def test_missing_name(self):
        assert parse_row({"name": "  ", "latitude": "35", "longitude": "133"}) is None

    def test_blank_fields_become_none(self):
        attrs = parse_row({"name": "湯", "description": "", "tags": " "})
        assert attrs["description"] is None
        assert attrs["tags"] is None
        assert attrs["latitude"] is None

    def test_bad_coordinates_dropped_together(self, caplog):
        with caplog.at_level(logging.WARNING, logger="scripts.import_onsens"):
            attrs = parse_row({"name": "湯", "latitude": "95", "longitude": "133"})
        assert (attrs["latitude"], attrs["longitude"]) == (None, None)
        assert "invalid coordinates" in caplog.text

    def test_half_pair_dropped(self):
        attrs = parse_row({"name": "湯", "latitude": "35.0", "longitude": ""})
        assert (attrs["latitude"], attrs["longitude"]) == (None, None)


class TestImportOnsenFile:
    def test_import(self, db, tmp_path):
        n = import_onsen_file(db, write_csv(tmp_path))
        assert n == 3
        rows = db.query(Onsen).order_by(Onsen.id).all()
        assert [o.name for o in rows] == ["松江しんじ湖温泉", "玉造温泉", "座標不明の湯"]
        assert rows[0].tags == "outdoor,露天風呂"
        assert rows[2].latitude is None

    def test_imported_catalog_is_searchable(self, db, tmp_path):
        import_onsen_file(db, write_csv(tmp_path))
        criteria = SearchCriteria(center=(35.4681, 133.0486), radius_km=1, tag_filter="outdoor")
        assert [o.name for o in search_onsens_db(db, criteria)] == ["松江しんじ湖温泉"]

    def test_utf8_bom(self, db, tmp_path):
        path = tmp_path / "bom.csv"
        path.write_text(CSV_TEXT, encoding="utf-8-sig")
        assert import_onsen_file(db, path) == 3

    def test_replace(self, seeded_db, tmp_path):
        onsen = seeded_db.query(Onsen).first()
        seeded_db.add(Review(onsen_id=onsen.id, rating=5))
        seeded_db.commit()

        n = import_onsen_file(seeded_db, write_csv(tmp_path), replace=True)
        assert n == 3
        assert seeded_db.query(Onsen).count() == 3
        assert seeded_db.query(Review).count() == 0

    def test_append_by_default(self, seeded_db, tmp_path):
        import_onsen_file(seeded_db, write_csv(tmp_path))
        assert seeded_db.query(Onsen).count() == 6
