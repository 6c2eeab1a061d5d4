"""项目路径映射单元测试"""

from __future__ import annotations

import pytest

from tfscm.core.exceptions import ValidationError
from tfscm.core.models import ProjectMapping
from tfscm.core.project_path import (
    get_project_paths,
    parse_project_mappings,
    validate_project_path,
    validate_user_name,
)


class TestParseProjectMappings:

    def test_single_path_maps_to_root(self):
        assert parse_project_mappings("$/proj", "work") == [ProjectMapping("$/proj", "work")]

    def test_sub_directory(self):
        result = parse_project_mappings("$/proj/src ; $/proj/lib : lib", "work")
        assert result == [
            ProjectMapping("$/proj/src", "work"),
            ProjectMapping("$/proj/lib", "work/lib"),
        ]

    def test_order_preserved(self):
        result = parse_project_mappings("$/c;$/a;$/b", ".")
        assert [m.project_path for m in result] == ["$/c", "$/a", "$/b"]

    def test_entry_count_matches(self):
        spec = ";".join(f"$/p{i}:d{i}" for i in range(5))
        result = parse_project_mappings(spec, ".")
        assert len(result) == 5
        assert result[3] == ProjectMapping("$/p3", "./d3")

    def test_whitespace_around_separators(self):
        result = parse_project_mappings("  $/a  :  x  ;  $/b  ", ".")
        assert result == [ProjectMapping("$/a", "./x"), ProjectMapping("$/b", ".")]

    def test_empty_entries_skipped(self):
        result = parse_project_mappings("$/a;;$/b;", ".")
        assert [m.project_path for m in result] == ["$/a", "$/b"]

    def test_duplicate_last_wins_first_position(self):
        result = parse_project_mappings("$/a:one;$/b;$/a:two", ".")
        assert result == [ProjectMapping("$/a", "./two"), ProjectMapping("$/b", ".")]

    def test_empty_sub_directory_maps_to_root(self):
        assert parse_project_mappings("$/a:", ".") == [ProjectMapping("$/a", ".")]

    def test_multiple_colons_rejected(self):
        with pytest.raises(ValidationError, match="多个") as exc:
            parse_project_mappings("$/a:x:y", ".")
        assert exc.value.details == ["$/a:x:y"]

    def test_missing_server_path_rejected(self):
        with pytest.raises(ValidationError, match="服务器路径"):
            parse_project_mappings(":x", ".")

    @pytest.mark.parametrize("spec", ["", "   ", ";;"])
    def test_empty_spec_rejected(self, spec):
        with pytest.raises(ValidationError, match="必填"):
            parse_project_mappings(spec, ".")


class TestGetProjectPaths:

    def test_server_paths_only(self):
        assert get_project_paths("$/a:x;$/b") == ["$/a", "$/b"]


class TestValidateProjectPath:

    def test_valid(self):
        validate_project_path("$/proj;$/other:sub")

    def test_missing_root(self):
        with pytest.raises(ValidationError) as exc:
            validate_project_path("$/ok;proj/bad")
        assert exc.value.details == ["proj/bad"]

    def test_empty(self):
        with pytest.raises(ValidationError, match="必填"):
            validate_project_path("")


class TestValidateUserName:

    @pytest.mark.parametrize("name", ["", "DOMAIN\\user", "user@domain", "user@domain.com"])
    def test_valid(self, name):
        validate_user_name(name)

    @pytest.mark.parametrize("name", ["user", "DOMAIN\\", "@domain"])
    def test_invalid(self, name):
        with pytest.raises(ValidationError, match="域"):
            validate_user_name(name)
