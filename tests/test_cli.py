"""Tests for the command line interface."""

import json

import pytest

from sheet_upload.cli import create_parser, main


class TestCLI:

    def test_parse_prints_envelope(self, tmp_path, xlsx_bytes, capsys):
        path = tmp_path / "p.xlsx"
        path.write_bytes(xlsx_bytes(["name", "age"], ["Ana", 30]))

        assert main(["parse", str(path)]) == 0

        out = json.loads(capsys.readouterr().out)
        assert out == {"data": "Arquivo processado com sucesso!", "resultado": [{"name": "Ana", "age": 30}]}

    def test_parse_empty_sheet(self, tmp_path, xlsx_bytes, capsys):
        path = tmp_path / "vazio.xlsx"
        path.write_bytes(xlsx_bytes(["name", "age"]))

        assert main(["parse", str(path)]) == 1

        assert json.loads(capsys.readouterr().out) == {"error": "A planilha está vazia."}

    def test_parse_missing_file(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["parse", str(tmp_path / "nada.xlsx")])

    def test_send_missing_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["send", str(tmp_path / "nada.xlsx"), "--url", "http://localhost:1"])

        assert exc.value.code == 2

    def test_send_defaults(self):
        args = create_parser().parse_args(["send", "p.xlsx"])

        assert args.command == "send"
        assert args.url.startswith("http://localhost:")
