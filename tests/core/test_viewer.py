from src.core.errors import LoadError
from src.core.viewer import Banner, GeneExpressionViewer


def test_plot_single_gene_reproduces_source_records(viewer):
    viewer.add_gene("GENE1")

    plot = viewer.on_plot()

    assert plot is not None and viewer.plot is plot
    assert [(c.condition, c.mean_avg_expressing, c.mean_pct_express) for c in plot.cells] == [
        ("A", 10.0, 50.0),
        ("B", 20.0, 80.0),
    ]
    assert plot.title == "Expression: GENE1"
    assert plot.conditions == ("A", "B")


def test_plot_with_empty_selection_shows_transient_banner_and_keeps_plot(viewer, clock):
    viewer.add_gene("GENE1")
    previous = viewer.on_plot()
    viewer.remove_gene("GENE1")

    assert viewer.on_plot() is None

    assert viewer.plot is previous
    (banner,) = viewer.active_banners()
    assert "al menos un gen" in banner.message
    assert not banner.persistent

    clock.advance(4.9)
    assert viewer.active_banners()
    clock.advance(0.2)
    assert viewer.active_banners() == []


def test_plot_without_matching_records_reports_selection_error(viewer):
    viewer.add_gene("GENE10")

    assert viewer.on_plot() is None
    assert viewer.plot is None
    assert "No se encontraron datos" in viewer.active_banners()[0].message


def test_clear_resets_tags_plot_and_input(viewer):
    viewer.on_input("gen")
    viewer.add_gene("GENE1")
    viewer.add_gene("GENE2")
    viewer.on_plot()

    viewer.on_clear()

    assert list(viewer.selection) == []
    assert viewer.plot is None
    assert viewer.input_value == ""
    assert viewer.suggestions == []


def test_submit_resolves_typed_gene_and_clears_input(viewer):
    viewer.on_input("gene2")

    assert viewer.on_submit("gene2") == "GENE2"
    assert viewer.selection.as_list() == ["GENE2"]
    assert viewer.input_value == ""


def test_submit_unknown_gene_is_ignored(viewer):
    assert viewer.on_submit("NOPE") is None
    assert not viewer.selection


def test_input_offers_suggestions_and_selection_adds_gene(viewer):
    assert viewer.on_input("gene1") == ["GENE1", "GENE10"]

    viewer.on_suggestion_selected("GENE10")

    assert "GENE10" in viewer.selection
    assert viewer.suggestions == []


def test_multi_gene_title_lists_selection(viewer):
    viewer.add_gene("GENE2")
    viewer.add_gene("GENE1")

    plot = viewer.on_plot()

    assert plot.title == "Expression: GENE2, GENE1"
    assert len(plot.cells) == 3


def test_failed_load_keeps_previous_data_and_shows_persistent_banner(viewer, expression_data, tmp_path, clock):
    assert not viewer.load_data(tmp_path / "missing.tsv", tmp_path / "missing.txt")

    assert viewer.data is expression_data
    (banner,) = viewer.active_banners()
    assert banner.persistent
    clock.advance(3600)
    assert viewer.active_banners() == [banner]


def test_load_data_from_files(data_files):
    viewer = GeneExpressionViewer()
    assert not viewer.is_loaded

    assert viewer.load_data(*data_files)
    assert viewer.is_loaded
    assert len(viewer.records) == 5


def test_banner_activity_window():
    banner = Banner("x", expires_at=10.0)

    assert banner.is_active(9.0)
    assert not banner.is_active(10.0)
    assert Banner("y", persistent=True).is_active(1e9)


def test_load_error_is_a_viewer_error():
    from src.core.errors import ViewerError

    assert issubclass(LoadError, ViewerError)


def test_drain_hands_out_transient_banners_once_and_keeps_persistent(viewer):
    viewer.show_error("Error al cargar", persistent=True)
    viewer.on_plot()

    first = viewer.drain_banners()
    second = viewer.drain_banners()

    assert [b.persistent for b in first] == [True, False]
    assert [b.message for b in second] == ["Error al cargar"]
