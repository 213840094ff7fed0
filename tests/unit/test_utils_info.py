"""
Unit tests for system information utilities.

Tests the information collection used by the ``jnibind-info`` command
and the ``jnibind info`` subcommand.
"""

import pytest
import platform
import sys
from unittest.mock import patch
from jnibind.utils.info import get_system_info, get_jnibind_info, print_info, main


class TestSystemInfo:
    """Test system information collection."""

    def test_get_system_info_basic(self):
        """Test getting basic system information."""
        info = get_system_info()

        assert 'python_version' in info
        assert 'platform' in info
        assert 'architecture' in info
        assert 'yaml_version' in info

        assert info['python_version'] == sys.version
        assert info['platform'] == platform.platform()
        assert info['architecture'] == platform.architecture()

    def test_get_system_info_yaml_version(self):
        """Test that the PyYAML version is reported."""
        with patch('yaml.__version__', '6.0.1'):
            info = get_system_info()
            assert info['yaml_version'] == '6.0.1'


class TestJnibindInfo:
    """Test jnibind-specific information collection."""

    @patch('jnibind.__version__', '1.0.0')
    @patch('jnibind.__author__', 'Test Author')
    def test_get_jnibind_info_basic(self):
        """Test getting basic jnibind information."""
        info = get_jnibind_info()

        assert info['version'] == '1.0.0'
        assert info['author'] == 'Test Author'

    def test_get_jnibind_info_export_details(self):
        """Test the calling convention, markers and hooks are listed."""
        info = get_jnibind_info()

        assert info['calling_convention'] == 'system'
        assert info['markers'] == ['#[no_mangle]', '#[allow(non_snake_case)]']
        assert info['hooks'] == ['JNI_OnLoad', 'JNI_OnUnload']


class TestPrintInfo:
    """Test information printing functionality."""

    @patch('jnibind.utils.info.get_jnibind_info')
    @patch('jnibind.utils.info.get_system_info')
    @patch('builtins.print')
    def test_print_info_basic(self, mock_print, mock_system_info, mock_jnibind_info):
        """Test basic information printing."""
        mock_jnibind_info.return_value = {
            'version': '1.0.0',
            'author': 'Test Author',
            'calling_convention': 'system',
            'markers': ['#[no_mangle]'],
            'hooks': ['JNI_OnLoad', 'JNI_OnUnload'],
        }

        mock_system_info.return_value = {
            'python_version': '3.11.4 (main, ...)',
            'platform': 'Linux-6.1.0',
            'architecture': ('64bit', 'ELF'),
            'yaml_version': '6.0.1',
        }

        print_info()

        assert mock_print.call_count > 5

        printed_text = ' '.join([str(call[0][0]) for call in mock_print.call_args_list])
        assert 'jnibind Version: 1.0.0' in printed_text
        assert 'Author: Test Author' in printed_text
        assert 'Calling Convention: extern "system"' in printed_text
        assert 'Hooks: JNI_OnLoad, JNI_OnUnload' in printed_text
        assert 'Python Version: 3.11.4' in printed_text
        assert 'PyYAML Version: 6.0.1' in printed_text


class TestMainFunction:
    """Test main entry point functionality."""

    @patch('jnibind.utils.info.print_info')
    def test_main_success(self, mock_print_info):
        """Test successful main execution."""
        main()
        mock_print_info.assert_called_once()

    @patch('jnibind.utils.info.print_info', side_effect=Exception("Test error"))
    @patch('builtins.print')
    @patch('sys.exit')
    def test_main_error(self, mock_exit, mock_print, mock_print_info):
        """Test main execution with error."""
        main()

        mock_print_info.assert_called_once()
        mock_print.assert_called_once_with("Error getting system information: Test error")
        mock_exit.assert_called_once_with(1)


class TestInfoIntegration:
    """Integration tests for info functionality."""

    def test_print_info_integration(self):
        """Test print_info integration."""
        with patch('builtins.print'):
            print_info()

    def test_main_integration(self):
        """Test main function integration."""
        with patch('builtins.print'):
            with patch('sys.exit') as mock_exit:
                main()
                mock_exit.assert_not_called()


if __name__ == '__main__':
    pytest.main([__file__])
