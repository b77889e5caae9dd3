"""Tests for the tracer module."""

import numpy as np
import pytest


class TestSummarize:
    """Tests for object summarization."""

    def test_numpy_array_summary(self):
        from distfield.tracer import summarize

        arr = np.zeros((100, 200), dtype=np.float64)
        summary = summarize(arr)

        assert "ndarray" in summary
        assert "100x200" in summary
        assert "float64" in summary

    def test_grid_summary(self):
        from distfield.field.grid import Grid
        from distfield.tracer import summarize

        summary = summarize(Grid.zeros(7, 3))

        assert summary == "Grid(7x3,float64)"

    def test_pydantic_model_summary(self):
        from distfield.models import ImageMeta
        from distfield.tracer import summarize

        summary = summarize(ImageMeta(width=4, height=4))

        assert "ImageMeta" in summary

    def test_summary_capped_length(self):
        from distfield.tracer import summarize

        large_dict = {f"key_{i}": f"value_{i}" for i in range(100)}

        assert len(summarize(large_dict, max_len=30)) <= 30

    def test_list_summary(self):
        from distfield.tracer import summarize

        summary = summarize([1, 2, 3, 4, 5])

        assert "list" in summary
        assert "len=5" in summary

    def test_long_string_summary(self):
        from distfield.tracer import summarize

        summary = summarize("a" * 1000)

        assert "len=1000" in summary
        assert len(summary) <= 200

    def test_scalars(self):
        from distfield.tracer import summarize

        assert summarize(None) == "None"
        assert summarize(20) == "20"
        assert summarize(np.int64(3)) == "3"


class TestTracerSpan:
    """Tests for tracer span functionality."""

    def test_span_nesting(self, capsys):
        from distfield.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        with tracer.span("outer", module="test"):
            with tracer.span("inner", module="test"):
                tracer.event("inside")

        lines = capsys.readouterr().err.strip().split("\n")

        assert len(lines) == 5
        assert "test:outer  start" in lines[0]
        assert "  test:inner  start" in lines[1]
        assert "test:inner  inside" in lines[2]
        assert "end ok" in lines[4]

    def test_failed_span_logs_error(self, capsys):
        from distfield.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        with pytest.raises(RuntimeError):
            with tracer.span("boom", module="test"):
                raise RuntimeError("bad")

        err = capsys.readouterr().err
        assert "ERROR" in err
        assert "RuntimeError: bad" in err
        assert tracer._depth == 0
        assert tracer._span_stack == []

    def test_level_filter(self, capsys):
        from distfield.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="WARN")
        tracer = get_tracer()

        tracer.event("hidden", level="DEBUG")
        tracer.event("shown", level="WARN")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "shown" in err

    def test_json_output(self, capsys):
        import json

        from distfield.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, json_output=True)
        get_tracer().event("hello", spread=20)

        lines = capsys.readouterr().err.strip().split("\n")
        record = json.loads(lines[-1])
        assert record["message"] == "hello spread=20"
        assert record["meta"] == {"spread": "20"}

    def test_file_output(self, temp_dir):
        import os

        from distfield.tracer import configure_tracer, get_tracer

        path = os.path.join(temp_dir, "trace.log")
        configure_tracer(enabled=True, file_path=path)
        get_tracer().event("to file")
        get_tracer().config.close()

        with open(path, encoding="utf-8") as f:
            assert "to file" in f.read()

    def test_tracer_disabled_no_output(self, capsys):
        from distfield.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=False)
        tracer = get_tracer()

        with tracer.span("test", module="test"):
            tracer.event("should not appear")

        assert capsys.readouterr().err == ""


class TestTraceDecorator:
    """Tests for the @trace decorator."""

    def test_decorator_runs_function(self):
        from distfield.tracer import trace

        @trace(label="test_func")
        def my_func(x):
            return x * 2

        assert my_func(5) == 10

    def test_decorator_logs_when_enabled(self, capsys):
        from distfield.tracer import configure_tracer, trace

        configure_tracer(enabled=True)

        @trace(label="double", arg_names=["x"])
        def my_func(x):
            return x * 2

        assert my_func(x=4) == 8
        err = capsys.readouterr().err
        assert "double  start x=4" in err

    def test_decorator_with_exception(self):
        from distfield.tracer import trace

        @trace(label="failing_func")
        def failing_func():
            raise ValueError("test error")

        with pytest.raises(ValueError):
            failing_func()
