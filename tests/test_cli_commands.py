import json

import matplotlib

matplotlib.use("Agg")

import numpy as np
from scipy.io import wavfile
from typer.testing import CliRunner

from specpress.cli import app
from specpress.media import read_bitmap, write_bitmap


def make_inputs(tmp_path):
    wav_path = tmp_path / "tone.wav"
    t = np.arange(1000) / 8000
    samples = np.rint(8000 * np.sin(2 * np.pi * 250 * t)).astype(np.int16)
    wavfile.write(wav_path, 8000, samples)
    bmp_path = write_bitmap(tmp_path / "flat.bmp", np.full((4, 4, 3), (200, 10, 77), dtype=np.uint8))
    return wav_path, samples, bmp_path


def test_compress_decompress_wav(tmp_path):
    wav_path, samples, _ = make_inputs(tmp_path)
    out_dir = tmp_path / "out"
    runner = CliRunner()

    result = runner.invoke(
        app, ["compress", str(wav_path), "--output-dir", str(out_dir), "--freq-cutoff", "8000"]
    )
    assert result.exit_code == 0, result.output
    record = out_dir / "tone.cmp"
    assert record.exists()
    assert "kept 1024 of 1024 bins" in result.stdout

    restored_dir = tmp_path / "restored"
    result = runner.invoke(app, ["decompress", str(record), "--output-dir", str(restored_dir)])
    assert result.exit_code == 0, result.output
    rate, data = wavfile.read(restored_dir / "tone.wav")
    assert rate == 8000
    np.testing.assert_array_equal(data, samples)


def test_compress_uses_configured_cutoff(tmp_path):
    wav_path, _, _ = make_inputs(tmp_path)
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"audio": {"freq_cutoff": 1000}, "output": {"directory": str(tmp_path / "cfg_out")}}))
    result = CliRunner().invoke(app, ["--config", str(cfg), "compress", str(wav_path)])
    assert result.exit_code == 0, result.output
    assert "kept 128 of 1024 bins" in result.stdout
    assert (tmp_path / "cfg_out" / "tone.cmp").exists()


def test_compress_decompress_bitmap(tmp_path):
    _, _, bmp_path = make_inputs(tmp_path)
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["--set", "image.compression_level=2", "compress", str(bmp_path), "-o", str(tmp_path)],
    )
    assert result.exit_code == 0, result.output
    assert "kept 2x2 of 4x4 coefficients" in result.stdout

    restored_dir = tmp_path / "restored"
    result = runner.invoke(app, ["decompress", str(tmp_path / "flat.cmpi"), "-o", str(restored_dir)])
    assert result.exit_code == 0, result.output
    np.testing.assert_array_equal(read_bitmap(restored_dir / "flat.bmp"), read_bitmap(bmp_path))


def test_analyze_writes_figure(tmp_path):
    wav_path, _, _ = make_inputs(tmp_path)
    result = CliRunner().invoke(app, ["analyze", str(wav_path), "-o", str(tmp_path / "plots")])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "plots" / "analysis.png").exists()


def test_user_errors_are_reported(tmp_path):
    wav_path, _, bmp_path = make_inputs(tmp_path)
    runner = CliRunner()

    stereo = tmp_path / "stereo.wav"
    wavfile.write(stereo, 8000, np.zeros((8, 2), dtype=np.int16))
    result = runner.invoke(app, ["compress", str(stereo), "-o", str(tmp_path)])
    assert result.exit_code == 2
    assert "mono" in result.output

    result = runner.invoke(app, ["compress", str(bmp_path), "--level", "1", "-o", str(tmp_path)])
    assert result.exit_code == 2

    unknown = tmp_path / "notes.txt"
    unknown.write_text("hello")
    result = runner.invoke(app, ["compress", str(unknown)])
    assert result.exit_code == 2
    result = runner.invoke(app, ["decompress", str(unknown)])
    assert result.exit_code == 2

    broken = tmp_path / "broken.cmp"
    broken.write_bytes(b"SPA1" + b"\0" * 4)
    result = runner.invoke(app, ["decompress", str(broken), "-o", str(tmp_path)])
    assert result.exit_code == 2


def test_invalid_overrides(tmp_path):
    wav_path, _, _ = make_inputs(tmp_path)
    runner = CliRunner()
    result = runner.invoke(app, ["--set", "audio.nope=1", "compress", str(wav_path)])
    assert result.exit_code == 2
    result = runner.invoke(app, ["--set", "image.compression_level=0.5", "compress", str(wav_path)])
    assert result.exit_code == 2
    result = runner.invoke(app, ["--config", str(tmp_path / "missing.yaml"), "compress", str(wav_path)])
    assert result.exit_code == 2


def test_decompress_keeps_existing_output_without_force(tmp_path):
    wav_path, _, _ = make_inputs(tmp_path)
    runner = CliRunner()
    result = runner.invoke(app, ["compress", str(wav_path), "-o", str(tmp_path), "-c", "1000"])
    assert result.exit_code == 0, result.output

    original = wav_path.read_bytes()
    result = runner.invoke(app, ["decompress", str(tmp_path / "tone.cmp"), "-o", str(tmp_path)])
    assert result.exit_code == 2
    assert "--force" in result.output
    assert wav_path.read_bytes() == original

    result = runner.invoke(app, ["decompress", str(tmp_path / "tone.cmp"), "-o", str(tmp_path), "--force"])
    assert result.exit_code == 0, result.output
    assert wav_path.read_bytes() != original
