from concurrent.futures import ThreadPoolExecutor

from hoverdoc.resolver import create_documentation_engine, create_resolver_context
from hoverdoc.test_utils import (
    SdkFactory,
    SpyArchiveLoader,
    StubParameter,
    StubSymbol,
    dita_classifier,
    dita_operation,
    dita_package,
)

CONTROLS = dita_package(
    "mx.controls",
    dita_classifier(
        "Button",
        "The <codeph>Button</codeph> control is a <b>clickable</b> rectangle.",
        [
            dita_operation(
                "setStyle",
                "Sets a style property.",
                params=[("styleProp", "Name of the style."), ("newValue", "New value.")],
            )
        ],
    ),
)

GLOBALS = dita_package(
    "__Global__",
    dita_classifier("Array", "Lets you create arrays."),
    dita_operation("trace", "Displays expressions.", params=[("rest", "Expressions.")]),
)


def _engine(sdk_factory: SdkFactory, loader=None):
    context = create_resolver_context(
        loader=loader, tool_location=sdk_factory.tool_location
    )
    return create_documentation_engine(context), context


def test_framework_library_documented_by_locale_archive(sdk_factory: SdkFactory):
    # 1. Arrange: the library has no embedded docs, its resource bundle does
    root = (
        sdk_factory.with_swc("sdk/frameworks/libs/framework.swc")
        .with_swc("sdk/frameworks/locale/en_US/framework_rb.swc", [CONTROLS])
        .build()
    )
    engine, _ = _engine(sdk_factory)
    archive = str(root / "sdk/frameworks/libs/framework.swc")
    button = StubSymbol("mx.controls.Button", containing_file_path=archive)
    set_style = StubSymbol(
        "mx.controls.Button.setStyle", containing_file_path=archive, is_callable=True
    )

    # 2. Act & 3. Assert
    assert engine.resolve_symbol_documentation(button, use_markdown=True) == (
        "The `Button` control is a **clickable** rectangle."
    )
    assert engine.resolve_symbol_documentation(button, use_markdown=False) == (
        "The Button control is a clickable rectangle."
    )
    assert (
        engine.resolve_parameter_documentation(StubParameter("newValue", set_style), False)
        == "New value."
    )


def test_playerglobal_uses_bundled_reference(sdk_factory: SdkFactory):
    root = (
        sdk_factory.with_swc("sdk/frameworks/libs/player/11.1/playerglobal.swc")
        .with_bundled_docs([GLOBALS])
        .build()
    )
    engine, context = _engine(sdk_factory)
    archive = str(root / "sdk/frameworks/libs/player/11.1/playerglobal.swc")
    array = StubSymbol("Array", containing_file_path=archive)
    trace = StubSymbol("trace", containing_file_path=archive, is_callable=True)

    assert engine.resolve_symbol_documentation(array, False) == "Lets you create arrays."
    assert engine.resolve_symbol_documentation(trace, False) == "Displays expressions."
    assert engine.resolve_parameter_documentation(StubParameter("rest", trace), False) == (
        "Expressions."
    )
    assert context.bundled_index.is_loaded


def test_third_party_archive_does_not_read_bundled_reference(sdk_factory: SdkFactory):
    root = (
        sdk_factory.with_swc("sdk/frameworks/libs/thirdparty.swc")
        .with_bundled_docs([GLOBALS])
        .build()
    )
    engine, context = _engine(sdk_factory)
    array = StubSymbol(
        "Array", containing_file_path=str(root / "sdk/frameworks/libs/thirdparty.swc")
    )

    assert engine.resolve_symbol_documentation(array, False) is None
    assert not context.bundled_index.is_loaded


def test_embedded_docs_win_over_locale_archive(sdk_factory: SdkFactory):
    embedded = dita_package("mx.controls", dita_classifier("Button", "Embedded."))
    root = (
        sdk_factory.with_swc("sdk/frameworks/libs/framework.swc", [embedded])
        .with_swc("sdk/frameworks/locale/en_US/framework_rb.swc", [CONTROLS])
        .build()
    )
    engine, _ = _engine(sdk_factory)
    button = StubSymbol(
        "mx.controls.Button",
        containing_file_path=str(root / "sdk/frameworks/libs/framework.swc"),
    )

    assert engine.resolve_symbol_documentation(button, False) == "Embedded."


def test_embedded_docs_without_the_symbol_end_resolution(sdk_factory: SdkFactory):
    other = dita_package("mx.controls", dita_classifier("Other", "Other doc."))
    root = (
        sdk_factory.with_swc("sdk/frameworks/libs/framework.swc", [other])
        .with_swc("sdk/frameworks/locale/en_US/framework_rb.swc", [CONTROLS])
        .build()
    )
    engine, _ = _engine(sdk_factory)
    button = StubSymbol(
        "mx.controls.Button",
        containing_file_path=str(root / "sdk/frameworks/libs/framework.swc"),
    )

    assert engine.resolve_symbol_documentation(button, False) is None


def test_deeply_nested_embedded_markup_yields_no_documentation(sdk_factory: SdkFactory):
    desc = "<p>" * 3000 + "deep" + "</p>" * 3000
    root = sdk_factory.with_swc(
        "project/libs/deep.swc",
        [dita_package("com.example", dita_classifier("Deep", desc))],
    ).build()
    engine, _ = _engine(sdk_factory)
    symbol = StubSymbol(
        "com.example.Deep", containing_file_path=str(root / "project/libs/deep.swc")
    )

    assert engine.resolve_symbol_documentation(symbol, True) is None


def test_unreadable_library_falls_through_to_locale_archive(sdk_factory: SdkFactory):
    root = (
        sdk_factory.with_file("sdk/frameworks/libs/framework.swc", "not a zip")
        .with_swc("sdk/frameworks/locale/en_US/framework_rb.swc", [CONTROLS])
        .build()
    )
    engine, _ = _engine(sdk_factory)
    button = StubSymbol(
        "mx.controls.Button",
        containing_file_path=str(root / "sdk/frameworks/libs/framework.swc"),
    )

    assert engine.resolve_symbol_documentation(button, False) == (
        "The Button control is a clickable rectangle."
    )


def test_project_library_outside_sdk(sdk_factory: SdkFactory):
    root = sdk_factory.with_swc(
        "project/libs/widgets.swc",
        [dita_package("com.example", dita_classifier("Widget", "A widget."))],
    ).build()
    engine, _ = _engine(sdk_factory)
    archive = str(root / "project/libs/widgets.swc")

    assert (
        engine.resolve_symbol_documentation(
            StubSymbol("com.example.Widget", containing_file_path=archive), False
        )
        == "A widget."
    )
    assert (
        engine.resolve_symbol_documentation(
            StubSymbol("com.example.Gadget", containing_file_path=archive), False
        )
        is None
    )


def test_concurrent_requests_share_caches(sdk_factory: SdkFactory):
    root = (
        sdk_factory.with_swc("sdk/frameworks/libs/framework.swc")
        .with_swc("sdk/frameworks/locale/en_US/framework_rb.swc", [CONTROLS])
        .build()
    )
    loader = SpyArchiveLoader(delay=0.02)
    engine, _ = _engine(sdk_factory, loader=loader)
    archive = str(root / "sdk/frameworks/libs/framework.swc")
    names = ["mx.controls.Button", "mx.controls.Button.setStyle", "mx.controls.Missing"]
    symbols = [StubSymbol(names[i % 3], containing_file_path=archive) for i in range(30)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(
            pool.map(lambda s: engine.resolve_symbol_documentation(s, False), symbols)
        )

    assert results[0] == "The Button control is a clickable rectangle."
    assert results[1] == "Sets a style property."
    assert results[2] is None
    assert len(loader.opened) == 2
    assert len(set(loader.opened)) == 2
