# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for the zpltree command line reader."""

from pathlib import Path

import pytest

from zpltree import parse_text
from zpltree.cli import build_arg_parser, format_tree, main

EXAMPLE_FILE = Path(__file__).parent / 'data' / 'example.zpl'


class TestCli:
    """Tests for zpltree.cli.main."""

    def test_lists_top_level_names(self, capsys):
        """Test the default output is one top-level name per line."""
        assert main([str(EXAMPLE_FILE)]) == 0
        assert capsys.readouterr().out == 'context\nmain\n'

    def test_tree(self, capsys):
        """Test --tree prints every entry indented by depth."""
        assert main([str(EXAMPLE_FILE), '--tree']) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[:4] == ['context', '    iothreads = 1', '    verbose = 1', 'main']
        assert '            hwm = 1000' in lines
        assert lines[-1] == '        bind = inproc://addr3'

    def test_lookup_paths(self, capsys):
        """Test each PATH prints its value, or the path alone when valueless."""
        rc = main([str(EXAMPLE_FILE), 'main/type', 'main/frontend/bind', 'main//frontend'])
        assert rc == 0
        assert capsys.readouterr().out.splitlines() == [
            'main/type = zqueue',
            'main/frontend/bind = inproc://addr1',
            'main//frontend',
        ]

    def test_lookup_missing_path(self, capsys):
        """Test an unresolved path is reported and sets exit status 1."""
        rc = main([str(EXAMPLE_FILE), 'main/nothing', 'main/type'])
        assert rc == 1
        captured = capsys.readouterr()
        assert captured.out == 'main/type = zqueue\n'
        assert "'nothing' not found" in captured.err

    def test_parse_error(self, tmp_path, capsys):
        """Test a parse error is reported with its line and exit status 2."""
        path = tmp_path / 'bad.zpl'
        path.write_text('main\n    bad name = 1\n', encoding='utf-8')
        assert main([str(path)]) == 2
        assert 'line 2' in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        """Test an unreadable file exits with status 2."""
        assert main([str(tmp_path / 'missing.zpl')]) == 2
        assert 'cannot read' in capsys.readouterr().err

    def test_tab_policy_option(self, tmp_path, capsys):
        """Test --tabs error rejects tab indentation."""
        path = tmp_path / 'tabs.zpl'
        path.write_text('main\n\ttype = zqueue\n', encoding='utf-8')
        assert main([str(path)]) == 0
        capsys.readouterr()
        assert main([str(path), '--tabs', 'error']) == 2
        assert 'tab in indentation' in capsys.readouterr().err

    def test_max_depth_option(self, capsys):
        """Test --max-depth limits nesting."""
        assert main([str(EXAMPLE_FILE), '--max-depth', '3']) == 2
        assert 'indentation stack exceeds 3 entries' in capsys.readouterr().err

    @pytest.mark.parametrize('value, expected', [('none', None), ('None', None), ('8', 8)])
    def test_max_depth_parsing(self, value, expected):
        """Test --max-depth accepts integers and 'none'."""
        args = build_arg_parser().parse_args(['file.zpl', '--max-depth', value])
        assert args.max_depth == expected

    def test_max_depth_rejects_zero(self, capsys):
        """Test --max-depth 0 is an argument error."""
        with pytest.raises(SystemExit):
            build_arg_parser().parse_args(['file.zpl', '--max-depth', '0'])


class TestFormatTree:
    """Tests for format_tree."""

    def test_format_subtree(self):
        """Test indentation is relative to the node passed in."""
        root = parse_text('a\n    b = 1\n        c\n    name/with/slash = x')
        a = root.child_by_name('a')
        assert format_tree(a) == ['b = 1', '    c', 'name/with/slash = x']
        assert format_tree(root, indent='  ') == [
            'a', '  b = 1', '    c', '  name/with/slash = x',
        ]
