"""Tests for the popcornvault-images command."""
import httpx

from helpers import make_png
from popcornvault import cli
from popcornvault.images import ImageLoader


def _patch_transport(monkeypatch, images):
    def handler(request):
        path = request.url.path.removeprefix("/t/p/w500")
        if path in images:
            return httpx.Response(200, content=images[path])
        return httpx.Response(404)

    original_build_loader = cli.build_loader

    def build_loader(config):
        loader = original_build_loader(config)
        return ImageLoader(
            loader.cache, loader.url_prefix, transport=httpx.MockTransport(handler)
        )

    monkeypatch.setattr(cli, "build_loader", build_loader)


def test_reports_fetched_cached_and_failed(monkeypatch, capsys, xdg_dirs):
    _patch_transport(monkeypatch, {"/new.jpg": make_png()})
    root = xdg_dirs["XDG_CACHE_HOME"] / "PopcornVault"
    root.mkdir(parents=True)
    (root / "old.png").write_bytes(make_png())

    status = cli.main(["/new.jpg", "/old.jpg", "/gone.jpg"])

    lines = capsys.readouterr().out.splitlines()
    assert status == 1
    assert lines == [
        "fetched  /new.jpg",
        "cached   /old.jpg",
        "failed   /gone.jpg",
    ]
    assert (root / "new.png").is_file()


def test_exit_status_zero_when_everything_loads(monkeypatch, capsys):
    _patch_transport(monkeypatch, {"/a.jpg": make_png(), "/b.jpg": make_png()})

    assert cli.main(["/a.jpg", "/b.jpg"]) == 0
    assert capsys.readouterr().out.count("fetched") == 2


def test_cached_image_is_decoded_once(monkeypatch, capsys, xdg_dirs):
    from popcornvault import image_cache

    _patch_transport(monkeypatch, {})
    root = xdg_dirs["XDG_CACHE_HOME"] / "PopcornVault"
    root.mkdir(parents=True)
    (root / "old.png").write_bytes(make_png())

    decoded = []
    original_decode = image_cache.decode_image

    def counting_decode(data):
        decoded.append(data)
        return original_decode(data)

    monkeypatch.setattr(image_cache, "decode_image", counting_decode)

    assert cli.main(["/old.jpg"]) == 0
    assert capsys.readouterr().out == "cached   /old.jpg\n"
    assert len(decoded) == 1
