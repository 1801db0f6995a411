import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import ConfigValidationError
from .models import BlogPost, Tool, ToolCategory
from .store import DEFAULT_BLOG_PREFIX, DEFAULT_CATEGORY_PREFIX, CatalogStore

logger = logging.getLogger(__name__)


def _parse(model, raw: list, label: str, problems: list[str]) -> list:
    out = []
    for i, item in enumerate(raw or []):
        try:
            out.append(model.model_validate(item))
        except ValidationError as e:
            for err in e.errors():
                loc = ".".join(str(p) for p in err["loc"]) or "<root>"
                problems.append(f"{label}[{i}].{loc}: {err['msg']}")
    return out


def load_catalog_data(
    data: dict[str, Any],
    category_prefix: str = DEFAULT_CATEGORY_PREFIX,
    blog_prefix: str = DEFAULT_BLOG_PREFIX,
) -> CatalogStore:
    """
    Build a validated CatalogStore from a plain dict with "tools", "categories"
    and "posts" lists. Malformed records and invariant violations are all
    reported together in one ConfigValidationError.
    """
    if not isinstance(data, dict):
        raise ConfigValidationError("catalog must be a JSON object")
    problems: list[str] = []
    tools = _parse(Tool, data.get("tools"), "tools", problems)
    categories = _parse(ToolCategory, data.get("categories"), "categories", problems)
    posts = _parse(BlogPost, data.get("posts"), "posts", problems)
    if problems:
        raise ConfigValidationError(problems)
    return CatalogStore.build(
        tools=tools,
        categories=categories,
        posts=posts,
        category_prefix=category_prefix,
        blog_prefix=blog_prefix,
    )


def load_catalog(
    path: str | Path,
    category_prefix: str = DEFAULT_CATEGORY_PREFIX,
    blog_prefix: str = DEFAULT_BLOG_PREFIX,
) -> CatalogStore:
    path = Path(path)
    logger.info("Loading catalog from %s", path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigValidationError(f"catalog file not found: {path}") from e
    except UnicodeDecodeError as e:
        raise ConfigValidationError(f"catalog file {path} is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"catalog file {path} is not valid JSON: {e}") from e
    except OSError as e:
        raise ConfigValidationError(f"cannot read catalog file {path}: {e}") from e
    return load_catalog_data(data, category_prefix=category_prefix, blog_prefix=blog_prefix)
