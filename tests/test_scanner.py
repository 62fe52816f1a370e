"""
Tests for directory scanning, dedup and ordering.
"""

import pytest

from polyfield_track.errors import DirectoryUnreadable, DirectoryUnset
from polyfield_track.scanner import scan_directory


def _lif(event, *rows):
    return f"1,1,1,{event},+0.5,,\n" + "".join(r + "\n" for r in rows)


RACE_A = _lif("100m A", "1,1,,Smith,John,ClubA,10.50", "2,2,,Doe,Jane,ClubB,10.70")
RACE_B = _lif("200m B", "1,3,,Roe,Rick,ClubC,21.10")
RACE_C = _lif("400m C", "1,4,,Poe,Ann,ClubD,48.00")


class TestScanPreconditions:
    """Directory-level failures are the only caller-visible errors."""

    @pytest.mark.parametrize("directory", [None, ""])
    def test_unset(self, directory):
        with pytest.raises(DirectoryUnset):
            scan_directory(directory)

    def test_unreadable(self, tmp_path):
        with pytest.raises(DirectoryUnreadable):
            scan_directory(tmp_path / "does-not-exist")

    def test_empty_directory(self, export_dir):
        assert scan_directory(export_dir) == []


class TestScanDirectory:
    """Tests for scan_directory."""

    def test_ignores_unrecognized_and_directories(self, export_dir, write_export):
        write_export("race.lif", RACE_A)
        write_export("notes.csv", RACE_B)
        write_export("photo.png", "not an image")
        (export_dir / "archive.lif").mkdir()

        results = scan_directory(export_dir)
        assert [r.file_name for r in results] == ["race.lif"]

    def test_bad_file_is_excluded(self, export_dir, write_export):
        write_export("good.lif", RACE_A)
        write_export("empty.res", "")
        write_export("dns.lif", _lif("x", "DNS,9,,A,B,C,"))

        results = scan_directory(export_dir)
        assert [r.file_name for r in results] == ["good.lif"]

    def test_ordered_oldest_first(self, export_dir, write_export):
        write_export("a.lif", RACE_A, mtime=3000)
        write_export("b.lif", RACE_B, mtime=1000)
        write_export("c.lif", RACE_C, mtime=2000)

        results = scan_directory(export_dir)
        assert [r.file_name for r in results] == ["b.lif", "c.lif", "a.lif"]
        assert [r.modified_time for r in results] == [1000, 2000, 3000]

    def test_duplicate_exports_keep_newest(self, export_dir, write_export):
        write_export("race.lif", RACE_A, mtime=1000)
        write_export("race_resave.lif", RACE_A.replace("100m A", "100m A (copy)"), mtime=2000)
        write_export("other.lif", RACE_B, mtime=1500)

        results = scan_directory(export_dir)
        assert [r.file_name for r in results] == ["other.lif", "race_resave.lif"]
        assert results[1].modified_time == 2000

    def test_same_runners_different_times_are_distinct(self, export_dir, write_export):
        write_export("heat1.lif", RACE_A, mtime=1000)
        write_export("heat2.lif", RACE_A.replace("10.70", "10.80"), mtime=2000)

        assert len(scan_directory(export_dir)) == 2

    def test_mixed_formats(self, export_dir, write_export):
        write_export("a.lif", RACE_A, mtime=1000)
        write_export("b.res", "b.lif\t+1.0\n" "Place\tLane\tTime\n" "1\t4\t11.0\t5\tAl Bo\tX\n", mtime=2000)
        write_export("c.txt", "c.lif\tN/A\n" "Place\tLane\tTime\n" "1\t4\t12.0\t6 (M40)\tCy Do\t0.1\n", mtime=3000)

        results = scan_directory(export_dir)
        assert [r.event_name for r in results] == ["100m A", "b", "c"]
        assert results[2].wind == ""
        assert results[2].competitors[0].id == "6"
