"""
Constants shared by the step and its tests.
"""

# Key the surrounding CI reads to decide whether the test run passed
RESULT_ENV_KEY: str = "BITRISE_XAMARIN_TEST_RESULT"
RESULT_SUCCEEDED: str = "succeeded"
RESULT_FAILED: str = "failed"

CALABASH_CUCUMBER_GEM: str = "calabash-cucumber"

# `simulator_os_version` value selecting the newest runtime offering the device
LATEST_OS_VERSION: str = "latest"
DEFAULT_OS_NAME: str = "iOS"

# Environment injected into the cucumber process
DEVICE_TARGET_ENV: str = "DEVICE_TARGET"
APP_ENV: str = "APP"
BUNDLE_GEMFILE_ENV: str = "BUNDLE_GEMFILE"
