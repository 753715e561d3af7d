import numpy as np

from conftest import grey_rgb
from ssdmatch.controllers.search import SearchController
from ssdmatch.core.config import ConfigManager
from ssdmatch.vision import Offset


def test_run_reports_result_and_timings():
    values = np.full((5, 6), 200, dtype=np.uint8)
    values[1:3, 2:4] = [[1, 2], [3, 4]]
    controller = SearchController(workers=3, chunk_pixels=4, marker_color=(0, 0, 255))
    outcome = controller.run(grey_rgb(values), grey_rgb([[1, 2], [3, 4]], alpha=255))

    assert outcome.result.best_offset == Offset(2, 1)
    assert outcome.result.best_score == 0
    assert outcome.annotated.pixel(2, 1) == (0, 0, 255)
    assert outcome.template_luma.channels == 2
    assert set(outcome.timings) == {"luma_ms", "search_ms", "visualize_ms", "total_ms"}


def test_from_config(tmp_path, monkeypatch):
    monkeypatch.delenv("SSD_WORKERS", raising=False)
    monkeypatch.delenv("WORKERS", raising=False)
    monkeypatch.setenv("SSD_MARKER_COLOR", "1,2,3")
    cfg = ConfigManager(str(tmp_path / "config.ini"))
    cfg.config["DEFAULT"]["workers"] = "5"
    controller = SearchController.from_config(cfg)
    assert controller.workers == 5
    assert controller.marker_color == (1, 2, 3)
    assert SearchController.from_config(cfg, workers=2).workers == 2
