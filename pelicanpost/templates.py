from dataclasses import dataclass
from datetime import date as date_cls
from logging import getLogger
from typing import Optional, Sequence
import os
import re


@dataclass(frozen=True)
class PostTemplate:
    name: str
    description: str
    content: str


class UnknownTemplateError(KeyError):
    pass


DEFAULT_TEMPLATES = (
    PostTemplate(
        name='Basic Post',
        description='A basic blog post template',
        content='''Title: "{title}"
Date: {date}
Slug: {slug}
Status: draft
Tags:
Category: Articles
Summary: ""

# {title}

Write your blog post content here...

## Heading
''',
    ),
    PostTemplate(
        name='Notes Post',
        description='Template for Notes posts',
        content='''Title: "{title}"
Date: {date}
Slug: {slug}
Status: draft
Category: Notes
summary: "Semaine du au"

# {title}

## Prerequisites
''',
    ),
    PostTemplate(
        name='Book review Post',
        description='Template for book review',
        content='''Title: "{title}"
Date: {date}
Slug: {slug}
Status: draft
Tags:
Category: Books
Summary:

# {title}

## Overview

## Conclusion

**Overall Rating:** ⭐⭐⭐⭐⭐ (X/5)
''',
    ),
)

CATEGORY_DIRECTORIES = {
    'Articles': 'articles',
    'Notes': 'notes',
    'Books': 'books',
}

_CATEGORY_RE = re.compile(r'Category: (\w+)')


def get_template(name: str, templates: Sequence[PostTemplate] = DEFAULT_TEMPLATES) -> PostTemplate:
    for template in templates:
        if template.name == name:
            return template
    raise UnknownTemplateError(name)


def title_to_slug(title: str) -> str:
    slug = re.sub(r'[^a-z0-9]+', '-', title.lower())
    return slug.strip('-')


def category_from_template(content: str) -> str:
    match = _CATEGORY_RE.search(content)
    return match.group(1) if match else 'Other'


def category_directory(category: str) -> str:
    return CATEGORY_DIRECTORIES.get(category, 'other')


def render_template(template: PostTemplate, title: str, slug: str, date: str) -> str:
    replacements = {
        '{title}': title,
        '{date}': date,
        '{slug}': slug,
        '{description}': title.lower(),
        '{product}': title,
    }
    content = template.content
    for placeholder, value in replacements.items():
        content = content.replace(placeholder, value)
    return content


def create_post(
        content_dir: str,
        template: PostTemplate,
        title: str,
        slug: Optional[str] = None,
        date: Optional[str] = None,
        ) -> str:
    """
    Write a new post rendered from `template` to
    `<content_dir>/<category directory>/<slug>.md` and return its path.

    An existing file is never overwritten.
    """
    slug = slug or title_to_slug(title)
    if not slug:
        raise ValueError(f'Cannot derive a slug from title {title!r}')
    date = date or date_cls.today().isoformat()

    directory = os.path.join(content_dir, category_directory(category_from_template(template.content)))
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, f'{slug}.md')

    with open(path, 'x', encoding='utf-8') as f:
        f.write(render_template(template, title, slug, date))

    getLogger(__name__).info(f'New post created: {path}')
    return path
