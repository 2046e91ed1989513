"""Basic import tests to verify package structure."""


def test_import_agentsort():
    """Verify main package imports."""
    import agentsort
    assert agentsort.__version__ == "0.1.0"


def test_import_core():
    """Verify core module structure exists."""
    from agentsort import core
    assert hasattr(core, "SortEngine")
    assert hasattr(core, "TickScheduler")


def test_import_analysis():
    """Verify analysis module structure exists."""
    from agentsort import analysis
    assert hasattr(analysis, "__doc__")


def test_import_viz():
    """Verify viz module structure exists."""
    import matplotlib
    matplotlib.use("Agg")
    from agentsort import viz
    assert hasattr(viz, "plot_snapshot")
