import pytest
from streamlit.testing.v1 import AppTest

import tariff_engine.pipeline as pipeline


@pytest.fixture
def pipeline_calls(monkeypatch):
    calls = []
    run_pipeline = pipeline.run_pipeline

    def counting_run_pipeline(scenario, optimisation=False, **kwargs):
        calls.append((scenario, optimisation))
        return run_pipeline(scenario, optimisation=optimisation, **kwargs)

    monkeypatch.setattr(pipeline, "run_pipeline", counting_run_pipeline)
    return calls


def test_one_run_per_tab_without_smart_charging(pipeline_calls):
    at = AppTest.from_file("../app.py", default_timeout=30).run()
    assert not at.exception
    assert len(pipeline_calls) == 4
    assert not any(optimised for _, optimised in pipeline_calls)


def test_manual_baseline_only_for_market_tabs(pipeline_calls):
    at = AppTest.from_file("../app.py", default_timeout=30).run()
    pipeline_calls.clear()
    at.toggle[0].set_value(True).run()
    assert not at.exception
    # Four smart runs plus a manual baseline for windy, sunny and volatile.
    assert len(pipeline_calls) == 7
    assert sum(1 for _, optimised in pipeline_calls if not optimised) == 3
