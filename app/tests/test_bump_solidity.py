# Copyright (C) 2025 Logical Mechanism LLC
# SPDX-License-Identifier: GPL-3.0-only

# tests/test_bump_solidity.py

import stat
import sys

import pytest

import zkharness.bump_solidity as bump_mod
from zkharness.bump_solidity import bump_all, patch_contract, patch_source
from zkharness.errors import PatchMatchError

# trimmed snarkjs groth16 verifier template
GENERATED_VERIFIER = """//
// SPDX-License-Identifier: GPL-3.0
pragma solidity ^0.6.11;
library Pairing {
    struct G1Point {
        uint X;
        uint Y;
    }
}
contract Verifier {
    using Pairing for *;
    function verifyProof(
            uint[2] memory a,
            uint[2][2] memory b,
            uint[2] memory c,
            uint[1] memory input
        ) public view returns (bool r) {
        return false;
    }
}
"""

SIMPLE_VERIFIER = "pragma solidity ^0.7.0;\n\ncontract Verifier {\n}\n"


def write(tmp_path, name, content):
    path = tmp_path / f"{name}.sol"
    path.write_bytes(content.encode("utf-8"))
    return path


class TestPatchSource:
    def test_pragma_and_contract(self):
        assert patch_source(SIMPLE_VERIFIER, "Foo") == (
            "pragma solidity ^0.8.0;\n\ncontract Foo {\n}\n"
        )

    def test_only_first_occurrence(self):
        content = "pragma solidity ^0.6.11;\npragma solidity ^0.6.11;\ncontract Verifier {}\ncontract Verifier {}\n"
        assert patch_source(content, "Bar") == (
            "pragma solidity ^0.8.0;\npragma solidity ^0.6.11;\ncontract Bar {}\ncontract Verifier {}\n"
        )

    def test_does_not_touch_longer_names(self):
        content = "pragma solidity ^0.6.11;\ncontract VerifierBase {}\n"
        with pytest.raises(PatchMatchError, match="contract"):
            patch_source(content, "Foo")

    def test_missing_pragma(self):
        with pytest.raises(PatchMatchError, match="pragma"):
            patch_source("pragma solidity >=0.7.0 <0.9.0;\ncontract Verifier {}\n", "Foo")

    def test_missing_contract(self):
        with pytest.raises(PatchMatchError, match="contract"):
            patch_source("pragma solidity ^0.6.11;\ncontract PlonkVerifier {}\n", "Foo")


class TestPatchContract:
    def test_patch_targeting(self, tmp_path):
        path = write(tmp_path, "Foo", SIMPLE_VERIFIER)

        assert patch_contract("Foo", tmp_path) is True
        assert path.read_text() == "pragma solidity ^0.8.0;\n\ncontract Foo {\n}\n"

    def test_generated_verifier(self, tmp_path):
        path = write(tmp_path, "HelloWorldVerifier", GENERATED_VERIFIER)

        patch_contract("HelloWorldVerifier", tmp_path)
        patched = path.read_text()

        assert "pragma solidity ^0.8.0;" in patched
        assert "contract HelloWorldVerifier {" in patched
        assert "contract Verifier" not in patched
        assert patched == GENERATED_VERIFIER.replace(
            "pragma solidity ^0.6.11", "pragma solidity ^0.8.0"
        ).replace("contract Verifier", "contract HelloWorldVerifier")

    def test_second_run_is_a_noop(self, tmp_path):
        path = write(tmp_path, "Foo", SIMPLE_VERIFIER)
        patch_contract("Foo", tmp_path)
        once = path.read_bytes()
        mtime = path.stat().st_mtime_ns

        assert patch_contract("Foo", tmp_path) is False
        assert path.read_bytes() == once
        assert path.stat().st_mtime_ns == mtime

    def test_crlf_preserved(self, tmp_path):
        path = write(tmp_path, "Foo", SIMPLE_VERIFIER.replace("\n", "\r\n"))
        patch_contract("Foo", tmp_path)
        assert path.read_bytes() == b"pragma solidity ^0.8.0;\r\n\r\ncontract Foo {\r\n}\r\n"

    def test_file_mode_preserved(self, tmp_path):
        path = write(tmp_path, "Foo", SIMPLE_VERIFIER)
        path.chmod(0o644)

        assert patch_contract("Foo", tmp_path) is True
        assert stat.S_IMODE(path.stat().st_mode) == 0o644

    def test_mismatch_leaves_file_alone(self, tmp_path):
        content = "pragma solidity ^0.6.11;\ncontract Something {}\n"
        path = write(tmp_path, "Foo", content)

        with pytest.raises(PatchMatchError):
            patch_contract("Foo", tmp_path)
        assert path.read_text() == content
        assert [p.name for p in tmp_path.iterdir()] == ["Foo.sol"]

    @pytest.mark.parametrize("name", ["1Foo", "Foo-Bar", "Foo Bar", ""])
    def test_invalid_contract_name(self, tmp_path, name):
        with pytest.raises(PatchMatchError, match="not a valid Solidity contract name"):
            patch_contract(name, tmp_path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            patch_contract("Missing", tmp_path)


class TestBumpAll:
    def test_patches_every_sol_file(self, tmp_path):
        write(tmp_path, "HelloWorldVerifier", GENERATED_VERIFIER)
        write(tmp_path, "Multiplier3Verifier", GENERATED_VERIFIER)
        (tmp_path / "README.md").write_text("contract Verifier")

        results = bump_all(tmp_path)

        assert results == {"HelloWorldVerifier": None, "Multiplier3Verifier": None}
        assert "contract Multiplier3Verifier {" in (
            tmp_path / "Multiplier3Verifier.sol"
        ).read_text()
        assert (tmp_path / "README.md").read_text() == "contract Verifier"

    def test_failures_are_isolated(self, tmp_path, capsys):
        write(tmp_path, "Broken", "contract Verifier {}\n")
        write(tmp_path, "Good", SIMPLE_VERIFIER)

        results = bump_all(tmp_path)

        assert isinstance(results["Broken"], PatchMatchError)
        assert results["Good"] is None
        assert "contract Good {" in (tmp_path / "Good.sol").read_text()
        assert "Broken.sol" in capsys.readouterr().err

    def test_empty_directory(self, tmp_path):
        assert bump_all(tmp_path) == {}


class TestMain:
    def test_exit_code_on_failure(self, tmp_path, monkeypatch):
        write(tmp_path, "Broken", "contract Verifier {}\n")
        monkeypatch.setattr(sys, "argv", ["bump_solidity", str(tmp_path)])

        with pytest.raises(SystemExit) as e:
            bump_mod.main()
        assert e.value.code == 1

    def test_success(self, tmp_path, monkeypatch, capsys):
        write(tmp_path, "Foo", SIMPLE_VERIFIER)
        monkeypatch.setattr(sys, "argv", ["bump_solidity", str(tmp_path)])

        bump_mod.main()
        assert "patched" in capsys.readouterr().out

    def test_missing_directory(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["bump_solidity", str(tmp_path / "nope")])

        with pytest.raises(SystemExit) as e:
            bump_mod.main()
        assert e.value.code == 1


if __name__ == "__main__":
    pytest.main()
