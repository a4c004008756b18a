import os
import stat
from datetime import date
from pathlib import Path

import pytest

from tenistas.errors import EXPORT_ERROR_PREFIX, IMPORT_ERROR_PREFIX, PlayerExportError, PlayerImportError
from tenistas.models import Handedness, PlayerRecord
from tenistas.storage import CsvPlayerCodec


SAMPLE_CSV = (
    "id,nombre,pais,altura,peso,puntos,mano,fecha_nacimiento\n"
    "1,Novak Djokovic,Serbia,188,77,12030,DIESTRO,1987-05-22\n"
    "2,Daniil Medvedev,Rusia,198,83,10370,DIESTRO,1996-02-11\n"
    "3,Rafael Nadal,España,185,85,8270,ZURDO,1986-06-03\n"
)


@pytest.fixture
def codec() -> CsvPlayerCodec:
    return CsvPlayerCodec()


def test_import_reads_every_row(tmp_path: Path, codec: CsvPlayerCodec):
    source = tmp_path / "players.csv"
    source.write_text(SAMPLE_CSV, encoding="utf-8")

    result = codec.import_players(source)

    assert result.is_ok
    players = {player.name: player for player in result.value}
    assert len(players) == 3
    novak = players["Novak Djokovic"]
    assert novak.country == "Serbia"
    assert novak.weight == 77
    assert novak.height == 188
    assert novak.birth_date == date(1987, 5, 22)
    assert novak.handedness is Handedness.RIGHT_HANDED
    rafa = players["Rafael Nadal"]
    assert rafa.country == "España"
    assert rafa.handedness is Handedness.LEFT_HANDED


def test_unknown_hand_code_reads_as_unknown(codec: CsvPlayerCodec):
    text = SAMPLE_CSV.replace("ZURDO", "SINIESTRO")

    result = codec.parse(text)

    assert result.value[2].handedness is Handedness.UNKNOWN


def test_header_only_is_an_empty_success(codec: CsvPlayerCodec):
    result = codec.parse("id,nombre,pais,altura,peso,puntos,mano,fecha_nacimiento\n")

    assert result.is_ok
    assert result.value == []


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   \n",
        "id,nombre,pais\n1,InvalidData",
        SAMPLE_CSV + "4,Broken,Nowhere,180,80,100,DIESTRO,not-a-date\n",
        SAMPLE_CSV + "5,Short,Row\n",
        SAMPLE_CSV + "6,Negative,Points,180,80,-10,DIESTRO,1990-01-01\n",
    ],
)
def test_malformed_sources_fail_the_whole_import(codec: CsvPlayerCodec, text: str):
    result = codec.parse(text)

    assert result.is_err
    assert isinstance(result.error, PlayerImportError)
    assert result.error.message.startswith(IMPORT_ERROR_PREFIX)


def test_import_missing_file(tmp_path: Path, codec: CsvPlayerCodec):
    result = codec.import_players(tmp_path / "missing.csv")

    assert isinstance(result.error, PlayerImportError)
    assert IMPORT_ERROR_PREFIX in result.error.message


def test_export_round_trip(tmp_path: Path, codec: CsvPlayerCodec):
    target = tmp_path / "out.csv"
    players = [
        PlayerRecord(
            id=1,
            name="Novak Djokovic",
            country="Serbia",
            height=188.5,
            weight=77,
            points=12030,
            handedness=Handedness.RIGHT_HANDED,
            birth_date=date(1987, 5, 22),
        ),
        PlayerRecord(
            id=2,
            name="Lefty, Jr.",
            country="Somewhere",
            height=170,
            weight=70,
            points=0,
            handedness=Handedness.UNKNOWN,
            birth_date=date(2000, 1, 1),
        ),
    ]

    assert codec.export_players(target, players).is_ok
    content = target.read_text(encoding="utf-8")
    assert content.splitlines()[1] == "1,Novak Djokovic,Serbia,188.5,77,12030,DIESTRO,1987-05-22"

    reloaded = codec.import_players(target)
    assert reloaded.value == players


def test_export_empty_list_writes_header(tmp_path: Path, codec: CsvPlayerCodec):
    target = tmp_path / "empty.csv"

    assert codec.export_players(target, []).is_ok
    assert codec.import_players(target).value == []


def test_export_to_unwritable_target(tmp_path: Path, codec: CsvPlayerCodec):
    result = codec.export_players(tmp_path / "missing-dir" / "out.csv", [])

    assert result.is_err
    assert isinstance(result.error, PlayerExportError)
    assert result.error.message.startswith(EXPORT_ERROR_PREFIX)


def test_failed_export_leaves_no_temp_files(tmp_path: Path, codec: CsvPlayerCodec):
    target = tmp_path / "taken"
    target.mkdir()

    result = codec.export_players(target, [])

    assert result.is_err
    assert os.listdir(tmp_path) == ["taken"]


def test_export_creates_file_with_umask_default_mode(tmp_path: Path, codec: CsvPlayerCodec):
    target = tmp_path / "out.csv"
    umask = os.umask(0)
    os.umask(umask)

    assert codec.export_players(target, []).is_ok
    assert stat.S_IMODE(os.stat(target).st_mode) == 0o666 & ~umask


def test_export_keeps_existing_target_mode(tmp_path: Path, codec: CsvPlayerCodec):
    target = tmp_path / "out.csv"
    target.write_text("stale", encoding="utf-8")
    os.chmod(target, 0o640)

    assert codec.export_players(target, []).is_ok
    assert stat.S_IMODE(os.stat(target).st_mode) == 0o640
    assert target.read_text(encoding="utf-8").startswith("id,nombre")


def test_leading_byte_order_mark_is_ignored(tmp_path: Path, codec: CsvPlayerCodec):
    source = tmp_path / "players.csv"
    source.write_bytes(b"\xef\xbb\xbf" + SAMPLE_CSV.encode("utf-8"))

    from_file = codec.import_players(source)
    from_text = codec.parse("\ufeff" + SAMPLE_CSV)

    assert len(from_file.value) == 3
    assert from_text.value == from_file.value


def test_error_line_counts_quoted_newlines(codec: CsvPlayerCodec):
    text = (
        "id,nombre,pais,altura,peso,puntos,mano,fecha_nacimiento\n"
        '1,"Novak\nDjokovic",Serbia,188,77,12030,DIESTRO,1987-05-22\n'
        "2,Daniil Medvedev,Rusia,198,83,10370,DIESTRO,not-a-date\n"
    )

    result = codec.parse(text)

    assert result.is_err
    assert "line 4" in result.error.message
