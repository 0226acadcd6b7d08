pytest_plugins = ["prflow.testing.conftest"]
