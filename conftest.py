pytest_plugins = ["hoverdoc.test_utils.fixtures"]
