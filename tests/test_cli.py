from huffcodec.cli import main


def test_compress_then_decompress(tmp_path, capsys):
    src = tmp_path / "note.txt"
    src.write_bytes(b"command line round trip " * 10)
    packed = tmp_path / "note.txt.huf"
    restored = tmp_path / "note_decoded.txt"

    assert main(["compress", str(src), str(packed)]) == 0
    assert "File compressed successfully!" in capsys.readouterr().out

    assert main(["decompress", str(packed), str(restored)]) == 0
    assert "File decompressed successfully!" in capsys.readouterr().out
    assert restored.read_bytes() == src.read_bytes()


def test_prompts_for_missing_names(tmp_path, monkeypatch, capsys):
    src = tmp_path / "in.bin"
    src.write_bytes(b"\x00\x01\x01\x02")
    answers = iter([str(src), str(tmp_path / "in.bin.huf")])
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        return next(answers)

    monkeypatch.setattr("builtins.input", fake_input)

    assert main(["compress"]) == 0
    assert prompts == ["Enter the input file name: ", "Enter the output file name: "]
    assert (tmp_path / "in.bin.huf").exists()


def test_missing_input_file(tmp_path, capsys):
    assert main(["compress", str(tmp_path / "missing"), str(tmp_path / "out.huf")]) == 1
    assert "Error opening input file!" in capsys.readouterr().err


def test_unwritable_output(tmp_path, capsys):
    src = tmp_path / "in.txt"
    src.write_bytes(b"abc")
    blocker = tmp_path / "blocker"
    blocker.write_bytes(b"")
    assert main(["compress", str(src), str(blocker / "out.huf")]) == 1
    assert "Error opening output file!" in capsys.readouterr().err


def test_corrupt_input_reports_format_error(tmp_path, capsys):
    bad = tmp_path / "bad.huf"
    bad.write_bytes(b"\xff\xff\xff\xff")
    assert main(["decompress", str(bad), str(tmp_path / "out")]) == 1
    assert "Invalid compressed file" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()


def test_batch_and_report_commands(tmp_path, capsys):
    data = tmp_path / "data"
    data.mkdir()
    (data / "a.txt").write_bytes(b"batch command " * 20)
    out = tmp_path / "out"

    assert main(["batch", "--input-root", str(data), "--output-root", str(out)]) == 0
    assert "Processed 1 files, 0 failed." in capsys.readouterr().out

    assert main(["report", "--input-root", str(data), "--output-root", str(out), "--formats", "csv"]) == 0
    assert (out / "report" / "report.csv").exists()
    assert not (out / "report" / "report.json").exists()
