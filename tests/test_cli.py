"""Tests for the command line entrypoint and its output formats."""

import json
from pathlib import Path

from jsonschema import Draft202012Validator

from npm_dependents.cli import main

REPORT_SCHEMA = (
    Path(__file__).resolve().parent.parent
    / "src"
    / "npm_dependents"
    / "schemas"
    / "report.schema.json"
)

LODASH_LOCK = {
    "lockfileVersion": 2,
    "packages": {
        "": {"name": "app"},
        "node_modules/lodash": {"version": "4.17.21"},
    },
}


def _validate_report(report):
    schema = json.loads(REPORT_SCHEMA.read_text(encoding="utf-8"))
    errors = list(Draft202012Validator(schema).iter_errors(report))
    assert errors == []


def test_transitive_text_output(make_project, express_lock_v2, capsys):
    root = make_project({"dependencies": {"express": "^4.0.0"}}, package_lock=express_lock_v2)

    code = main([str(root), "mime-types"])

    assert code == 0
    assert capsys.readouterr().out == (
        "[package-lock.json]\n"
        "Analysis among 3 dependencies (1 modules).\n"
        "Used by 1 direct dependency:\n"
        "- express [v4.18.2]\n"
        "Used by 1 indirect dependency:\n"
        "- accepts [v1.3.8]\n"
        "\n"
        "Module mime-types v2.1.35\n"
    )


def test_plural_wording(make_project, express_lock_v2, capsys):
    root = make_project({"dependencies": {"express": "^4.0.0"}}, package_lock=express_lock_v2)

    main([str(root), "mime-db"])

    out = capsys.readouterr().out
    assert "Used by 2 indirect dependencies:\n- accepts [v1.3.8]\n- mime-types [v2.1.35]\n" in out


def test_direct_dependency_text_output(make_project, capsys):
    root = make_project({"dependencies": {"lodash": "^4.17.0"}}, package_lock=LODASH_LOCK)

    code = main([str(root), "lodash"])

    assert code == 0
    assert capsys.readouterr().out == (
        "The module has been installed for the project (found in the package.json file).\n"
        "\n"
        "[package-lock.json]\n"
        "Analysis among 0 dependencies (1 modules).\n"
        "It is a direct dependency; no other module depends on it.\n"
        "\n"
        "Module lodash v4.17.21\n"
    )


def test_not_found_exits_zero(make_project, express_lock_v2, capsys):
    root = make_project({"dependencies": {"express": "^4.0.0"}}, package_lock=express_lock_v2)

    code = main([str(root), "left-pad"])

    out = capsys.readouterr().out
    assert code == 0
    assert out.endswith("Module left-pad was not found.\n")
    assert "Used by" not in out


def test_direct_version_falls_back_to_manifest_range(make_project, capsys):
    lock = {
        "lockfileVersion": 3,
        "packages": {"node_modules/express": {"dependencies": {"accepts": "~1.3.8"}}},
    }
    root = make_project({"dependencies": {"express": "^4.0.0"}}, package_lock=lock)

    main([str(root), "accepts"])

    assert "- express [v4.0.0]\n" in capsys.readouterr().out


def test_json_output_matches_schema(make_project, express_lock_v2, capsys):
    root = make_project({"dependencies": {"express": "^4.0.0"}}, package_lock=express_lock_v2)

    code = main(["--json", str(root), "mime-types"])

    report = json.loads(capsys.readouterr().out)
    assert code == 0
    _validate_report(report)
    assert report["status"] == "found"
    assert report["module"] == {"name": "mime-types", "version": "2.1.35", "declared": False}
    assert report["direct"] == [{"name": "express", "version": "4.18.2"}]
    assert report["indirect"] == [{"name": "accepts", "version": "1.3.8"}]
    assert report["totals"] == {"edges": 3, "modules": 1, "direct": 1, "indirect": 1}


def test_json_not_found_matches_schema(make_project, capsys):
    root = make_project({"dependencies": {"lodash": "^4.17.0"}}, package_lock=LODASH_LOCK)

    main(["--json", str(root), "left-pad"])

    report = json.loads(capsys.readouterr().out)
    _validate_report(report)
    assert report["found"] is False
    assert report["module"]["version"] is None


def test_missing_arguments(capsys):
    code = main([])

    captured = capsys.readouterr()
    assert code == 2
    assert captured.out == ""
    assert "ERROR:" in captured.err


def test_missing_manifest(tmp_path, capsys):
    code = main([str(tmp_path), "lodash"])

    captured = capsys.readouterr()
    assert code == 3
    assert captured.out == ""
    assert "not an NPM project" in captured.err


def test_missing_lockfile(make_project, capsys):
    root = make_project({"dependencies": {"lodash": "^4.17.0"}})

    code = main([str(root), "lodash"])

    captured = capsys.readouterr()
    assert code == 4
    assert captured.out == ""
    assert "install the node_modules" in captured.err


def test_malformed_lockfile_emits_no_summary(make_project, capsys):
    root = make_project({"dependencies": {"lodash": "^4.17.0"}}, package_lock="{oops")

    code = main([str(root), "lodash"])

    captured = capsys.readouterr()
    assert code == 5
    assert "Analysis among" not in captured.out
    assert captured.out == ""
    assert "package-lock.json" in captured.err


def test_invalid_config(make_project, express_lock_v2, tmp_path, capsys):
    root = make_project({"dependencies": {"express": "^4.0.0"}}, package_lock=express_lock_v2)
    config = tmp_path / "settings.json"
    config.write_text(json.dumps({"lockfiles": ["bun.lockb"]}), encoding="utf-8")

    code = main(["--config", str(config), str(root), "accepts"])

    captured = capsys.readouterr()
    assert code == 6
    assert captured.out == ""
