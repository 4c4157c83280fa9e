from types import SimpleNamespace

import pytest

from cookshelf.entries import (
    Image,
    ImageIndexes,
    MissingSection,
    MissingStep,
    RecipeContent,
    RecipeEntry,
    RecipeImagesError,
    all_recipes,
    check_recipe_images,
    group_images,
    recipe_images,
    walk_dir,
)
from cookshelf.errors import NotRecipe
from cookshelf.walker import DirEntry, Walker


def _entry(tmp_path, name):
    path = tmp_path / name
    path.write_text("")
    return DirEntry.from_path(path)


def test_image_without_index(tmp_path):
    image = Image.from_entry("Pasta", _entry(tmp_path, "Pasta.jpg"))
    assert image == Image(indexes=None, path=tmp_path / "Pasta.jpg")


def test_image_with_step(tmp_path):
    image = Image.from_entry("Pasta", _entry(tmp_path, "Pasta.2.jpg"))
    assert image.indexes == ImageIndexes(section=0, step=2)


def test_image_with_section_and_step(tmp_path):
    image = Image.from_entry("Pasta", _entry(tmp_path, "Pasta.1.3.png"))
    assert image.indexes == ImageIndexes(section=1, step=3)


@pytest.mark.parametrize(
    "name",
    [
        "Other.jpg",
        "Pasta.x.jpg",
        "Pasta.txt",
        "Pasta",
        "Pasta.1.2.3.jpg",
        "Pasta.70000.jpg",
        "Pasta.-1.jpg",
    ],
)
def test_image_rejected(tmp_path, name):
    assert Image.from_entry("Pasta", _entry(tmp_path, name)) is None


def test_image_ordering_puts_unindexed_first(tmp_path):
    plain = Image(None, tmp_path / "Pasta.jpg")
    step = Image(ImageIndexes(0, 1), tmp_path / "Pasta.1.jpg")
    section = Image(ImageIndexes(1, 0), tmp_path / "Pasta.1.0.jpg")
    assert sorted([section, step, plain]) == [plain, step, section]


def test_recipe_images_sorted(tmp_path):
    recipe = tmp_path / "Pasta.cook"
    recipe.write_text("")
    for name in ["Pasta.1.0.jpg", "Pasta.2.png", "Pasta.jpg", "Soup.jpg", "notes.txt"]:
        (tmp_path / name).write_text("")
    images = recipe_images(recipe)
    assert [i.path.name for i in images] == ["Pasta.jpg", "Pasta.2.png", "Pasta.1.0.jpg"]


def test_recipe_images_missing_dir(tmp_path):
    assert recipe_images(tmp_path / "missing" / "Pasta.cook") == []


def test_recipe_entry_names():
    entry = RecipeEntry("dir/Pasta.cook")
    assert entry.file_name() == "Pasta.cook"
    assert entry.name() == "Pasta"
    assert entry.relative_name() == str(RecipeEntry("dir/Pasta").path)


def test_recipe_entry_read(tmp_path):
    path = tmp_path / "Pasta.cook"
    path.write_text("Boil @water{1%l}.", encoding="utf-8")
    content = RecipeEntry(path).read()
    assert content == RecipeContent("Boil @water{1%l}.")
    assert str(content) == "Boil @water{1%l}."


def test_recipe_entry_from_dir_entry(tmp_path):
    recipe = RecipeEntry.from_dir_entry(_entry(tmp_path, "Pasta.cook"))
    assert recipe.path == tmp_path / "Pasta.cook"
    with pytest.raises(NotRecipe):
        RecipeEntry.from_dir_entry(_entry(tmp_path, "Pasta.jpg"))


def test_recipe_entry_images_are_cached(tmp_path):
    path = tmp_path / "Pasta.cook"
    path.write_text("")
    (tmp_path / "Pasta.jpg").write_text("")
    entry = RecipeEntry(path)
    first = entry.images()
    (tmp_path / "Pasta.1.jpg").write_text("")
    assert entry.images() == first
    assert len(recipe_images(path)) == len(first) + 1


def test_with_images_overrides_lookup(tmp_path):
    path = tmp_path / "Pasta.cook"
    path.write_text("")
    (tmp_path / "Pasta.jpg").write_text("")
    entry = RecipeEntry(path).with_images([])
    assert entry.images() == []
    assert entry.path == path


def _recipe(*step_counts):
    return SimpleNamespace(
        sections=[SimpleNamespace(content=[None] * n) for n in step_counts]
    )


def test_check_recipe_images_ok(tmp_path):
    images = [
        Image(None, tmp_path / "a.jpg"),
        Image(ImageIndexes(0, 1), tmp_path / "a.1.jpg"),
        Image(ImageIndexes(1, 0), tmp_path / "a.1.0.jpg"),
    ]
    assert check_recipe_images(images, _recipe(2, 1)) is None


def test_check_recipe_images_errors(tmp_path):
    images = [
        Image(ImageIndexes(3, 0), tmp_path / "a.3.0.jpg"),
        Image(ImageIndexes(0, 5), tmp_path / "a.5.jpg"),
    ]
    with pytest.raises(RecipeImagesError) as info:
        check_recipe_images(images, _recipe(2))
    missing_section, missing_step = info.value.errors
    assert isinstance(missing_section, MissingSection)
    assert missing_section.section == 3
    assert missing_section.image == tmp_path / "a.3.0.jpg"
    assert isinstance(missing_step, MissingStep)
    assert (missing_step.section, missing_step.step) == (0, 5)


def test_walk_dir_groups_images(tmp_path):
    for name in ["Pasta.1.jpg", "Pasta.cook", "Pasta.jpg", "Soup.cook", "Soup.png"]:
        (tmp_path / name).write_text("")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "Inner.cook").write_text("")
    entries = list(walk_dir(tmp_path))
    pasta, soup, sub = entries
    assert pasta.path == tmp_path / "Pasta.cook"
    assert {i.path.name for i in pasta.images()} == {"Pasta.1.jpg", "Pasta.jpg"}
    assert soup.path == tmp_path / "Soup.cook"
    assert [i.path.name for i in soup.images()] == ["Soup.png"]
    assert isinstance(sub, DirEntry) and sub.path == tmp_path / "sub"


def test_group_images_drops_orphan_images(tmp_path):
    (tmp_path / "Zeta.jpg").write_text("")
    assert list(group_images(Walker(tmp_path, 0))) == []


def test_walk_dir_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        walk_dir(tmp_path / "missing")


def test_all_recipes_recurses(tmp_path):
    (tmp_path / "a.cook").write_text("")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.cook").write_text("")
    (tmp_path / "sub" / "b.jpg").write_text("")
    recipes = list(all_recipes(tmp_path, 5))
    assert [r.path for r in recipes] == [tmp_path / "a.cook", tmp_path / "sub" / "b.cook"]
    assert [i.path for i in recipes[1].images()] == [tmp_path / "sub" / "b.jpg"]


def test_all_recipes_respects_depth(tmp_path):
    (tmp_path / "a.cook").write_text("")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.cook").write_text("")
    assert [r.path for r in all_recipes(tmp_path, 0)] == [tmp_path / "a.cook"]