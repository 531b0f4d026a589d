import unittest

import gdriveupdate


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(gdriveupdate, "GoogleDriveUpdater"))
        self.assertTrue(hasattr(gdriveupdate, "AuthInfo"))
        self.assertTrue(hasattr(gdriveupdate, "OAuthClient"))

        self.assertTrue(hasattr(gdriveupdate, "UpdateRequest"))
        self.assertTrue(hasattr(gdriveupdate, "ParentDelta"))
        self.assertTrue(hasattr(gdriveupdate, "reconcile_parents"))
        self.assertTrue(hasattr(gdriveupdate, "build_pipeline"))
        self.assertTrue(hasattr(gdriveupdate, "calc_rate"))

        self.assertTrue(hasattr(gdriveupdate, "GDriveUpdateError"))
        self.assertTrue(hasattr(gdriveupdate, "TransferTimeoutError"))

    def test___all___is_defined(self) -> None:
        for name in gdriveupdate.__all__:
            self.assertTrue(hasattr(gdriveupdate, name), name)
        self.assertIn("GoogleDriveUpdater", gdriveupdate.__all__)


if __name__ == "__main__":
    unittest.main()
