from langmap.resolver import crop_candidates, resolve_pages


class Existing:
    def __init__(self, titles):
        self.titles = set(titles)
        self.calls: list[str] = []

    def __call__(self, title: str) -> bool:
        self.calls.append(title)
        return title in self.titles


def test_crop_candidates_order():
    assert list(crop_candidates(["games", "chess"])) == [
        "games:chess",
        "games:chess:start",
        "games:start",
    ]
    assert list(crop_candidates([])) == []


def test_full_path_is_tried_first():
    exists = Existing({"games:chess", "games:start"})

    pages = resolve_pages({"en": ["games", "chess"]}, {"en": "start"}, exists)

    assert pages == {"en": "games:chess"}
    assert exists.calls == ["games:chess"]


def test_crops_longest_first():
    exists = Existing({"games:start"})

    pages = resolve_pages({"en": ["games", "chess"]}, {}, exists)

    assert pages == {"en": "games:start"}
    assert exists.calls == ["games:chess", "games:chess:start", "games:start"]


def test_default_used_only_after_all_candidates():
    exists = Existing(set())

    pages = resolve_pages({"en": ["games"]}, {"en": "start"}, exists)

    assert pages == {"en": "start"}
    assert exists.calls == ["games", "games:start"]


def test_language_without_anything_is_omitted():
    pages = resolve_pages({"de": ["spiele"]}, {"en": "start"}, Existing(set()))

    assert pages == {"en": "start"}


def test_success_continues_with_next_language():
    exists = Existing({"games", "hry:start"})

    pages = resolve_pages({"en": ["games"], "cs": ["hry"]}, {"de": "start"}, exists)

    assert pages == {"en": "games", "cs": "hry:start", "de": "start"}
    assert list(pages) == ["en", "cs", "de"]


def test_iteration_order_paths_then_defaults():
    pages = resolve_pages(
        {"cs": ["hry"]}, {"de": "start", "cs": "uvod", "en": "start"}, Existing(set())
    )

    assert list(pages) == ["cs", "de", "en"]
