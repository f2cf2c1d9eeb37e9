import unittest

from delver.dungeon import InvalidMapConfiguration, MapConfig


class TestMapConfig(unittest.TestCase):
    def test_defaults_validate(self):
        cfg = MapConfig().validate()
        self.assertEqual((cfg.width, cfg.height), (121, 71))
        self.assertEqual(cfg.island_threshold, 15)

    def test_dimension_boundaries(self):
        MapConfig(width=15, height=15).validate()
        MapConfig(width=1999, height=1999).validate()
        for w, h in ((16, 15), (14, 15), (15, 2000), (2001, 15)):
            with self.assertRaises(InvalidMapConfiguration):
                MapConfig(width=w, height=h).validate()

    def test_missing_dimension(self):
        with self.assertRaises(InvalidMapConfiguration) as ctx:
            MapConfig(width=0).validate()
        self.assertIn("required", str(ctx.exception))
        with self.assertRaises(InvalidMapConfiguration):
            MapConfig(height=None).validate()

    def test_knob_validation(self):
        bad = [
            dict(min_room_size=9, max_room_size=5),
            dict(connector_thickness=0),
            dict(straight_tendency=1.5),
            dict(num_caves=-1),
            dict(cave_width=0),
        ]
        for kw in bad:
            with self.assertRaises(InvalidMapConfiguration, msg=str(kw)):
                MapConfig(**kw).validate()

    def test_explicit_zero_is_honoured(self):
        cfg = MapConfig(num_caves=0, num_extra_connectors=0).validate()
        self.assertEqual(cfg.num_caves, 0)
        self.assertEqual(cfg.num_extra_connectors, 0)

    def test_from_mapping_coerces_strings(self):
        cfg = MapConfig.from_mapping(
            {
                "width": "41",
                "height": "21",
                "allow_room_overlap": "true",
                "straight_tendency": "0.25",
                "cave_setting": "6,8",
                "seed": "77",
                "unknown": "ignored",
            }
        )
        self.assertEqual((cfg.width, cfg.height), (41, 21))
        self.assertTrue(cfg.allow_room_overlap)
        self.assertEqual(cfg.straight_tendency, 0.25)
        self.assertEqual(cfg.cave_setting, (6, 8))
        self.assertEqual(cfg.seed, 77)

    def test_from_mapping_bad_value(self):
        with self.assertRaises(InvalidMapConfiguration):
            MapConfig.from_mapping({"width": "wide"})

    def test_from_env(self):
        import os
        from unittest import mock

        env = {"DELVER_MAP_WIDTH": "51", "DELVER_MAP_NUM_CAVES": "0"}
        with mock.patch.dict(os.environ, env):
            cfg = MapConfig.from_env(height=25)
        self.assertEqual(cfg.width, 51)
        self.assertEqual(cfg.num_caves, 0)
        self.assertEqual(cfg.height, 25)


if __name__ == "__main__":
    unittest.main()
