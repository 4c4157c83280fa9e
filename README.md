# cookshelf

Tools for working with a directory of Cooklang recipes (`.cook` files):

- `cookshelf.walker`: a breadth-first, name-sorted directory walker that
  yields recipe files, images and subdirectories and skips dot files;
- `cookshelf.index`: an index that finds a recipe from a full or partial path,
  built all at once or lazily on demand;
- `cookshelf.entries`: recipe entries, discovery of recipe images
  (`Recipe.jpg`, `Recipe.3.png`, `Recipe.1.2.webp`) and a check that step
  images point to steps that exist;
- `cookshelf.style`: ANSI terminal styles for showing recipes to people;
- `cookshelf.md_options`: options for writing recipes as Markdown;
- `cookshelf.errors`: the exceptions raised by the package, all derived from
  `CookshelfError`.

The package has no dependencies outside the standard library.

## Installation

```
pip install cookshelf
```

## Finding recipes

```python
from cookshelf.index import new_index

index = new_index("recipes", 10).config_dir(".cooklang").indexed()

entry = index.get("Pasta")          # partial path, with or without ".cook"
print(entry.path, entry.name(), entry.relative_name())
print(entry.read().text)

for image in entry.images():        # looked up once, then cached
    print(image.path, image.indexes)
```

Lookups ignore case and the file extension and match the end of a path, so
`"pasta"`, `"Pasta.cook"` and `"italian/pasta"` can all name
`recipes/italian/Pasta.cook`. When several recipes match, the one with the
fewest path components wins, then the alphabetically first.

`new_index(base_path, max_depth)` returns an `FsIndexBuilder`. Its
`ignore(name)` skips files and directories with that name, and
`config_dir(name)` does the same (unless the name starts with `.`, which is
skipped anyway) and logs a warning when that directory turns up below the top
level.

A lazy index only walks as far as it needs to find the recipe it is asked for:

```python
lazy = new_index("recipes", 10).lazy()
if lazy.contains("desserts/cake"):
    cake = lazy.get("desserts/cake")
full = lazy.index_all()             # walk the rest and get an FsIndex
```

`resolve(recipe, relative_to=None)` first treats the query as a path to a
`.cook` file: a leading `/` means the base directory, otherwise the path is
taken relative to `relative_to` when given. If that path does not exist, is not
a recipe or lies outside the base directory, the query is looked up in the
index instead. A lookup that finds nothing raises
`cookshelf.errors.RecipeNotFound`; a query with no file name raises
`cookshelf.errors.InvalidName`.

A complete `FsIndex` can be kept up to date by hand with `insert(path)` and
`remove(path)`. Both take a path that starts with the base path and raise
`ValueError` otherwise; `insert` raises `FileNotFoundError` if the file does
not exist. `get_all()` yields every indexed recipe.

`norm_path(path)` resolves `.` and `..` components lexically, without
touching the disk.

## Walking and listing directories

```python
from cookshelf.walker import Walker
from cookshelf.entries import all_recipes, walk_dir, RecipeEntry

for entry in Walker("recipes", 1):
    print(entry.path, entry.is_dir(), entry.is_cooklang_file(), entry.is_image())

for recipe in all_recipes("recipes", 2):
    print(recipe.relative_name(), recipe.images())

for item in walk_dir("recipes"):    # one directory, not descending
    if isinstance(item, RecipeEntry):
        print("recipe", item.name())
    else:
        print("dir", item.file_name())
```

The walker yields each directory's entries sorted by name, files before
directories, then moves on to the subdirectories in name order. Directories
deeper than `max_depth` are yielded but not entered. `walk_dir` raises
`FileNotFoundError` when the path is not a directory. `all_recipes` and
`walk_dir` attach the images that sit next to each recipe in the listing.

## Recipe images

An image belongs to a recipe when its name is the recipe's name followed by
one of the extensions in `cookshelf.walker.IMAGE_EXTENSIONS` (`jpeg`, `jpg`,
`png`, `heic`, `gif`, `webp`):

- `Pasta.jpg`: an image of the whole recipe (`indexes` is `None`);
- `Pasta.3.jpg`: step 3 of section 0;
- `Pasta.1.2.jpg`: step 2 of section 1.

`recipe_images(path)` lists the images next to a recipe file, sorted.
`check_recipe_images(images, recipe)` raises `RecipeImagesError` when an image
names a section or step the recipe lacks; its `errors` attribute holds
`MissingSection` and `MissingStep` exceptions. The recipe only needs a
`sections` sequence whose items have a `content` sequence:

```python
from types import SimpleNamespace
from cookshelf.entries import check_recipe_images, recipe_images

images = recipe_images("recipes/Pasta.cook")
recipe = SimpleNamespace(sections=[SimpleNamespace(content=["step one", "step two"])])
check_recipe_images(images, recipe)
```

## Terminal styles

```python
from cookshelf.style import Color, CookStyles, Style, set_styles, styles

custom = CookStyles(ingredient=Style(fg=Color.BRIGHT_BLUE, bold=True))
set_styles(custom)                  # True the first time, before styles() is used
print(styles().ingredient.render("flour"))
```

`set_styles` can succeed only once, and only before `styles()` has been
called; otherwise it returns `False`. `Style.render` wraps text in ANSI
escape codes and leaves it unchanged when the style sets nothing.

## Markdown options

```python
from cookshelf.md_options import DescriptionStyle, Options

opts = Options.from_dict({"tags": False, "description": "heading"})
assert opts.description is DescriptionStyle.HEADING
print(opts.heading.section_heading(2))   # "Section 2"
print(opts.to_dict())
```

`Options.from_dict` fills missing keys with their defaults and raises
`ValueError` for values of the wrong type. `description` accepts
`"hidden"`, `"blockquote"`, `"heading"`, `"default"` or a boolean;
`front_matter_name` accepts a key name, `None` or a boolean (`True` means
`"name"`).

## What this package does not do

It does not parse Cooklang text: `RecipeEntry.read()` returns the file's text
as a `RecipeContent`, and parsing it is left to you. It does not render
recipes either; it provides the terminal styles and the Markdown options such
rendering would use, but no function that writes a recipe as Markdown,
terminal output or Cooklang. There is no command-line program.