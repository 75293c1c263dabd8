from datetime import datetime

from app.services.file_storage import relative_upload_path, sanitize_filename, save_upload


class TestSanitizeFilename:
    def test_spaces_and_separators(self):
        assert sanitize_filename("frota março.xlsx") == "frota_março.xlsx"
        assert sanitize_filename("../../etc/passwd") == "....etcpasswd"
        assert sanitize_filename("a?b*c.xlsx") == "abc.xlsx"


class TestSaveUpload:
    def test_partitioned_by_month_and_user(self, tmp_path):
        path = save_upload(
            b"conteudo", "Frota Abril.xlsx", tmp_path, username="ana.lima",
            now=datetime(2026, 4, 9, 10, 0),
        )

        assert path.read_bytes() == b"conteudo"
        assert path.parent == tmp_path / "2026" / "04" / "ana.lima"
        assert path.name.endswith("_Frota_Abril.xlsx")
        assert relative_upload_path(path, tmp_path).startswith("2026/04/ana.lima/")

    def test_same_name_does_not_overwrite(self, tmp_path):
        first = save_upload(b"1", "x.xlsx", tmp_path)
        second = save_upload(b"2", "x.xlsx", tmp_path)

        assert first != second
        assert first.read_bytes() == b"1"

    def test_unusable_names_fall_back(self, tmp_path):
        path = save_upload(b"", "???", tmp_path, username="///", now=datetime(2026, 1, 2))

        assert path.parent.name == "anonimo"
        assert path.name.endswith("_arquivo.xlsx")
