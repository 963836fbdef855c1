from fastapi.testclient import TestClient

from api import app


client = TestClient(app)


def test_branching_endpoint():
	resp = client.post("/branching", json={"content": "if (a && b) {}", "language": "c"})
	assert resp.status_code == 200
	body = resp.json()
	assert body["conditional_count"] == 1
	assert body["logical_operators"] == 1
	assert body["cyclomatic_complexity"] == 2
	assert body["pure_percentage"] == 100
	assert body["hardcoded_percentage"] == 0


def test_branching_endpoint_unknown_language():
	resp = client.post("/branching", json={"content": "", "language": "cobol"})
	assert resp.status_code == 200
	assert resp.json()["total_branches"] == 0


def test_scan_endpoint(tmp_path):
	(tmp_path / "app.py").write_text("if x:\n    pass\n")
	resp = client.post("/scan", json={"root_path": str(tmp_path), "enhanced": True})
	assert resp.status_code == 200
	body = resp.json()
	assert body["stats"]["total_files"] == 1
	app_py = next(f for f in body["files"] if f["name"] == "app.py")
	assert app_py["enhanced_info"]["branching"]["conditional_count"] == 1


def test_scan_rejects_missing_root(tmp_path):
	resp = client.post("/scan", json={"root_path": str(tmp_path / "nope")})
	assert resp.status_code == 400


def test_scan_unknown_profile_uses_generic(tmp_path):
	(tmp_path / "lib.rs").write_text("pub fn f() {}\n")
	resp = client.post("/scan", json={"root_path": str(tmp_path), "profile": "bogus"})
	assert resp.status_code == 200
	lib = next(f for f in resp.json()["files"] if f["name"] == "lib.rs")
	assert lib["tags"] == ["source"]
