import importlib
import sys
from unittest.mock import patch


def test_importing_main_module_does_not_run_cli():
    sys.modules.pop("clai.__main__", None)

    with patch("clai.cli.main") as main:
        importlib.import_module("clai.__main__")

    main.assert_not_called()
