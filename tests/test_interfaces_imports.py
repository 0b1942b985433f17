from pathlib import Path


def test_can_import_all_protocols():
    import incbuild.core.interfaces as I

    assert hasattr(I, "ContentCacheProtocol")
    assert hasattr(I, "EntryDiscoveryProtocol")
    assert hasattr(I, "PathResolverProtocol")
    assert hasattr(I, "LoggerFactoryProtocol")
    assert hasattr(I, "TemplateEngineProtocol")
    assert hasattr(I, "TextPostProcessorProtocol")


def test_concrete_classes_satisfy_protocols(tmp_path: Path):
    import incbuild.core.interfaces as I
    from incbuild.io.content_cache import ContentCache
    from incbuild.io.walker import EntryWalker
    from incbuild.logging.factory import DefaultLoggerFactory
    from incbuild.processing.text_ops import TextPostProcessor
    from incbuild.rendering.path_resolver import IncludePathResolver
    from incbuild.rendering.template_engine import DoubleBraceTemplateEngine

    assert isinstance(ContentCache(), I.ContentCacheProtocol)
    assert isinstance(EntryWalker(), I.EntryDiscoveryProtocol)
    assert isinstance(IncludePathResolver(project_root=tmp_path), I.PathResolverProtocol)
    assert isinstance(DefaultLoggerFactory(), I.LoggerFactoryProtocol)
    assert isinstance(TextPostProcessor(project_root=tmp_path), I.TextPostProcessorProtocol)
    assert isinstance(DoubleBraceTemplateEngine(), I.TemplateEngineProtocol)
