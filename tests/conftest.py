pytest_plugins = ["ghindex.testing.conftest"]
