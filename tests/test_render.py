"""
SubnetMaze Renderer Tests
"""

import pytest

from subnetmaze.models import SubnetMazeError
from subnetmaze.render import Renderer


class TestRenderer:
    """Tests for HUD, table and SVG output."""

    def test_hud(self, sim):
        sim.set_mask(24)
        hud = Renderer(sim).render_hud()
        assert hud.splitlines()[:3] == [
            "LOCAL_IP: 10.0.0.1",
            "MASK_PREFIX: /24",
            "SUBNET_MASK: 255.255.255.0",
        ]

    def test_table_lists_every_node(self, sim):
        sim.set_mask(8)
        table = Renderer(sim).render_table().splitlines()
        assert len(table) == len(sim.store) + 1
        assert table[1].endswith("current")
        assert table[2].endswith("reachable")

    def test_svg_mirrors_active_lines(self, sim):
        sim.set_mask(8)
        sim.set_mask(16)
        svg = Renderer(sim).render_svg()
        assert svg.startswith("<svg")
        assert svg.count('<line id="Line_') == len(sim.lines.active)
        assert svg.count("<circle") == len(sim.store) + 1
        assert 'fill="#00ff00"' in svg

    def test_svg_colors(self, sim):
        sim.set_mask(8)
        svg = Renderer(sim).render_svg()
        assert svg.count('fill="#00ffff"') == 6

    def test_unknown_template(self, sim):
        with pytest.raises(SubnetMazeError):
            Renderer(sim).load_template("nope")

    def test_write_refuses_to_overwrite(self, tmp_path):
        target = tmp_path / "out" / "snapshot.svg"
        Renderer.write("<svg/>", str(target))
        assert target.read_text(encoding="utf-8") == "<svg/>"
        with pytest.raises(SubnetMazeError):
            Renderer.write("<svg></svg>", str(target))
        Renderer.write("<svg></svg>", str(target), overwrite=True)
        assert target.read_text(encoding="utf-8") == "<svg></svg>"
