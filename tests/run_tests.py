import unittest
import sys
import os

# Add the parent directory to the Python path so we can import the vimgram package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Import all test modules
from tests.test_config import TestReadiness, TestLoad, TestSave, TestConfigDir
from tests.test_client import TestRequestConstruction, TestNotConfigured, TestResponseHandling, TestConcurrency, TestHostileResponses
from tests.test_actions import TestStripCodeFence, TestDecodeAction
from tests.test_ansi import TestAnsi
from tests.test_interpreter import TestParseCommand, TestGenerateReply, TestCodeAssist
from tests.test_cli import TestFreeText, TestCommands, TestSetup, TestDescribeAction, TestREPL

if __name__ == '__main__':
    # Create a test suite with all test cases
    test_suite = unittest.TestSuite()

    # Add test cases from each module
    for case in (
        TestReadiness, TestLoad, TestSave, TestConfigDir,
        TestRequestConstruction, TestNotConfigured, TestResponseHandling, TestConcurrency, TestHostileResponses,
        TestStripCodeFence, TestDecodeAction, TestAnsi,
        TestParseCommand, TestGenerateReply, TestCodeAssist,
        TestFreeText, TestCommands, TestSetup, TestDescribeAction, TestREPL,
    ):
        test_suite.addTests(unittest.TestLoader().loadTestsFromTestCase(case))

    # Run the tests
    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(test_suite)
    sys.exit(0 if result.wasSuccessful() else 1)
