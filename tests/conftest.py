pytest_plugins = ["boardforge.testing.fixtures"]
