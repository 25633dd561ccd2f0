"""Tests for the command line harness."""

import pytest

from nca_crypto.cli import main
from tests.conftest import EXAMPLE_KEY, HEADER_KEY, reference_ctr, reference_xts


@pytest.fixture
def plain():
    return bytes((i * 3) & 0xFF for i in range(5000))


class TestCtrCommand:
    """Tests for `nca-crypto ctr`."""

    def test_whole_file(self, tmp_path, plain, capsys):
        src = tmp_path / "encryptedContents"
        out = tmp_path / "nca.bin"
        src.write_bytes(reference_ctr(EXAMPLE_KEY, bytes(16), plain))
        assert main(["ctr", "--key", EXAMPLE_KEY.hex(), str(src), str(out)]) == 0
        assert out.read_bytes() == plain
        assert "5,000 bytes" in capsys.readouterr().out

    def test_window_with_base_offset_and_seed(self, tmp_path, plain):
        seed = bytes.fromhex("00000000000000010000000000000000")
        src = tmp_path / "image.bin"
        out = tmp_path / "window.bin"
        src.write_bytes(reference_ctr(EXAMPLE_KEY, seed, plain))
        argv = [
            "ctr", "--key", EXAMPLE_KEY.hex(), "--counter", seed.hex(),
            "--base-offset", "0x200", "--offset", "7", "--size", "1000",
            "--chunk-size", "64", str(src), str(out),
        ]
        assert main(argv) == 0
        assert out.read_bytes() == plain[0x207:0x207 + 1000]

    def test_bad_key_size_exits_1(self, tmp_path, capsys):
        src = tmp_path / "in.bin"
        src.write_bytes(bytes(64))
        assert main(["ctr", "--key", "00" * 8, str(src), str(tmp_path / "o")]) == 1
        assert "'key' must be 0x10 bytes" in capsys.readouterr().err

    def test_window_past_end_exits_1(self, tmp_path, capsys):
        src = tmp_path / "in.bin"
        src.write_bytes(bytes(64))
        argv = ["ctr", "--key", EXAMPLE_KEY.hex(), "--offset", "60", "--size", "8", str(src), str(tmp_path / "o")]
        assert main(argv) == 1
        assert "exceeds region size" in capsys.readouterr().err

    def test_offset_past_end_leaves_no_output(self, tmp_path, capsys):
        src = tmp_path / "in.bin"
        out = tmp_path / "out.bin"
        src.write_bytes(bytes(64))
        argv = ["ctr", "--key", EXAMPLE_KEY.hex(), "--offset", "100", str(src), str(out)]
        assert main(argv) == 1
        err = capsys.readouterr().err
        assert "read of 0 bytes at offset 100 exceeds region size 64" in err
        assert not out.exists()

    def test_missing_input_exits_1(self, tmp_path):
        assert main(["ctr", "--key", EXAMPLE_KEY.hex(), str(tmp_path / "none"), str(tmp_path / "o")]) == 1

    def test_invalid_hex_is_usage_error(self, tmp_path):
        with pytest.raises(SystemExit) as info:
            main(["ctr", "--key", "zz", "a", "b"])
        assert info.value.code == 2


class TestHeaderCommand:
    """Tests for `nca-crypto header`."""

    def test_decrypts_header(self, tmp_path, capsys):
        header = bytearray(0xC00)
        header[0x200:0x204] = b"NCA3"
        encrypted = reference_xts(HEADER_KEY, bytes(header[:0x400]), 0, True)
        encrypted += reference_xts(HEADER_KEY, bytes(header[0x400:]), 2, True)
        src = tmp_path / "game.nca"
        out = tmp_path / "header.bin"
        src.write_bytes(encrypted + b"\x99" * 0x1000)
        assert main(["header", "--key", HEADER_KEY.hex(), str(src), str(out)]) == 0
        assert out.read_bytes() == bytes(header)
        assert "NCA3" in capsys.readouterr().out

    def test_truncated_file(self, tmp_path, capsys):
        src = tmp_path / "short.nca"
        src.write_bytes(bytes(0x100))
        assert main(["header", "--key", HEADER_KEY.hex(), str(src), str(tmp_path / "o")]) == 1
        assert "at least 0xC00" in capsys.readouterr().err
