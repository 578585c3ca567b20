pytest_plugins = ["pyroost.test_utils.fixtures"]
