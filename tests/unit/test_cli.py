"""
CLI Tests

Runs arbor_cli.main.main() in-process against files under tmp_path:
1. root prints the Merkle root (human and JSON)
2. prove writes a proof document that verify accepts
3. verify exits 2 on a tampered block and 1 on a malformed proof
4. empty input and out-of-range indices exit 1
"""

import json

import pytest

from arbor_cli.main import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, EXIT_VERIFICATION_FAILED, main
from core.crypto.hashing import sha3_256
from core.merkle import build


@pytest.fixture
def block_files(tmp_path, monkeypatch):
    """Four files a..d holding blocks b"a".. b"d"; cwd moved to tmp_path."""
    monkeypatch.chdir(tmp_path)
    paths = []
    for name in ["a", "b", "c", "d"]:
        path = tmp_path / f"{name}.txt"
        path.write_bytes(name.encode())
        paths.append(str(path))
    return paths


class TestRootCommand:

    def test_root_human_output(self, block_files, capsys):
        code = main(["root", *block_files])

        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        assert f"root: {build([b'a', b'b', b'c', b'd']).root.hex()}" in out
        assert "blocks: 4" in out

    def test_root_json_output(self, block_files, capsys):
        code = main(["root", *block_files, "--json"])

        data = json.loads(capsys.readouterr().out)
        assert code == EXIT_SUCCESS
        assert data["leaf_count"] == 4
        assert data["depth"] == 3
        assert data["root"] == build([b"a", b"b", b"c", b"d"]).root.hex()

    def test_root_with_chunking(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "data.bin"
        path.write_bytes(b"abcdefg")

        code = main(["root", str(path), "--chunk-size", "3", "--json"])

        data = json.loads(capsys.readouterr().out)
        assert code == EXIT_SUCCESS
        assert data["leaf_count"] == 3
        assert data["root"] == build([b"abc", b"def", b"g"]).root.hex()

    def test_root_with_alternate_hash(self, block_files, capsys):
        code = main(["root", *block_files, "--hash", "sha3_256", "--json"])

        data = json.loads(capsys.readouterr().out)
        assert code == EXIT_SUCCESS
        assert data["hash_algorithm"] == "sha3_256"
        assert data["root"] == build([b"a", b"b", b"c", b"d"], sha3_256).root.hex()

    def test_root_without_files_is_empty_tree(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)

        code = main(["root"])

        assert code == EXIT_RUNTIME_ERROR
        assert "empty" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)

        code = main(["root", str(tmp_path / "nope.txt")])

        assert code == EXIT_RUNTIME_ERROR
        assert "not found" in capsys.readouterr().err


class TestProveAndVerify:

    @pytest.mark.parametrize("index", [0, 1, 2, 3])
    def test_prove_then_verify(self, block_files, tmp_path, capsys, index):
        proof_path = tmp_path / f"proof{index}.json"

        assert main(["prove", *block_files, "--index", str(index), "--out", str(proof_path)]) == EXIT_SUCCESS
        capsys.readouterr()

        code = main(["verify", "--proof", str(proof_path), "--block", block_files[index]])

        assert code == EXIT_SUCCESS
        assert "verified: true" in capsys.readouterr().out

    def test_prove_to_stdout(self, block_files, capsys):
        code = main(["prove", *block_files, "--index", "2"])

        document = json.loads(capsys.readouterr().out)
        assert code == EXIT_SUCCESS
        assert document["leaf_index"] == 2
        assert [s["side"] for s in document["steps"]] == ["right", "left"]

    def test_prove_out_of_range(self, block_files, capsys):
        code = main(["prove", *block_files, "--index", "4"])

        assert code == EXIT_RUNTIME_ERROR
        assert "out of range" in capsys.readouterr().err

    def test_prove_empty_input(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)

        code = main(["prove", "--index", "0"])

        assert code == EXIT_RUNTIME_ERROR

    def test_verify_tampered_block(self, block_files, tmp_path, capsys):
        proof_path = tmp_path / "proof.json"
        main(["prove", *block_files, "--index", "1", "--out", str(proof_path)])
        tampered = tmp_path / "tampered.txt"
        tampered.write_bytes(b"B")
        capsys.readouterr()

        code = main(["verify", "--proof", str(proof_path), "--block", str(tampered)])

        assert code == EXIT_VERIFICATION_FAILED
        assert "verified: false" in capsys.readouterr().out

    def test_verify_against_explicit_root(self, block_files, tmp_path, capsys):
        proof_path = tmp_path / "proof.json"
        main(["prove", *block_files, "--index", "0", "--out", str(proof_path)])
        other_root = build([b"x"]).root.hex()
        capsys.readouterr()

        code = main([
            "verify", "--proof", str(proof_path), "--block", block_files[0],
            "--root", other_root, "--json",
        ])

        data = json.loads(capsys.readouterr().out)
        assert code == EXIT_VERIFICATION_FAILED
        assert data == {"verified": False, "leaf_index": 0, "root": other_root}

    def test_verify_malformed_proof_document(self, block_files, tmp_path, capsys):
        proof_path = tmp_path / "proof.json"
        proof_path.write_text(json.dumps({"leaf_index": 0, "root": "abcd"}))

        code = main(["verify", "--proof", str(proof_path), "--block", block_files[0]])

        assert code == EXIT_RUNTIME_ERROR
        assert "Invalid proof document" in capsys.readouterr().err

    def test_verify_missing_proof_file(self, block_files, tmp_path, capsys):
        code = main(["verify", "--proof", str(tmp_path / "none.json"), "--block", block_files[0]])

        assert code == EXIT_RUNTIME_ERROR


class TestConfigCommand:

    def test_init_creates_file(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "arbor.json"

        code = main(["config", "--init", "--path", str(path)])

        assert code == EXIT_SUCCESS
        assert json.loads(path.read_text())["hash_algorithm"] == "sha256"

    def test_init_refuses_to_overwrite(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "arbor.json"
        path.write_text("{}")

        assert main(["config", "--init", "--path", str(path)]) == EXIT_RUNTIME_ERROR

    def test_show_reflects_environment(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ARBOR_HASH_ALGORITHM", "blake2b_256")

        code = main(["config", "--show"])

        assert code == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["hash_algorithm"] == "blake2b_256"

    def test_config_file_sets_hash(self, block_files, tmp_path, capsys):
        (tmp_path / "arbor.json").write_text(json.dumps({"hash_algorithm": "sha3_256"}))

        code = main(["root", *block_files, "--json"])

        assert code == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["hash_algorithm"] == "sha3_256"

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR
