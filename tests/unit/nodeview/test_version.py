from unittest.mock import patch

from nodeview.version import get_source_revision
from nodeview.version import get_version
from nodeview.version import get_version_string
from nodeview.version import PACKAGE_DIR
from nodeview.version import SOURCE_ROOT


class TestGetVersion:
    def test_get_version_returns_package_version(self):
        with patch('nodeview.version.version', return_value='1.2.3') as mock_version:
            assert get_version() == '1.2.3'
        mock_version.assert_called_once_with('k8s-nodeview')

    def test_get_version_returns_dev_when_not_installed(self):
        from importlib.metadata import PackageNotFoundError
        with patch('nodeview.version.version', side_effect=PackageNotFoundError):
            assert get_version() == 'dev'


class TestGetSourceRevision:
    def test_revision_of_own_checkout(self):
        with patch('subprocess.run') as mock_run:
            mock_run.return_value.returncode = 0
            mock_run.return_value.stdout = f'{SOURCE_ROOT}\nabc1234\n'
            assert get_source_revision() == 'abc1234'
        assert mock_run.call_args.kwargs['cwd'] == PACKAGE_DIR

    def test_revision_of_unrelated_checkout_is_ignored(self, tmp_path, monkeypatch):
        # nodeview installed inside someone else's repository, run from there
        monkeypatch.chdir(tmp_path)
        with patch('subprocess.run') as mock_run:
            mock_run.return_value.returncode = 0
            mock_run.return_value.stdout = f'{tmp_path}\ndeadbee\n'
            assert get_source_revision() is None
        assert mock_run.call_args.kwargs['cwd'] == PACKAGE_DIR

    def test_returns_none_when_git_unavailable(self):
        with patch('subprocess.run', side_effect=FileNotFoundError):
            assert get_source_revision() is None

    def test_returns_none_outside_a_checkout(self):
        with patch('subprocess.run') as mock_run:
            mock_run.return_value.returncode = 128
            mock_run.return_value.stdout = ''
            assert get_source_revision() is None


class TestGetVersionString:
    def test_version_string_with_revision(self):
        with (
            patch('nodeview.version.get_version', return_value='1.2.3'),
            patch('nodeview.version.get_source_revision', return_value='abc1234'),
        ):
            assert get_version_string() == 'k8s-nodeview, version 1.2.3 (commit: abc1234)'

    def test_version_string_without_revision(self):
        with (
            patch('nodeview.version.get_version', return_value='1.2.3'),
            patch('nodeview.version.get_source_revision', return_value=None),
        ):
            assert get_version_string() == 'k8s-nodeview, version 1.2.3'
