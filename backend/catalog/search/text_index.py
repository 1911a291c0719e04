"""Weighted full-text index over product records.

The ``search_vector`` column is a stored generated column, so PostgreSQL
recomputes it on every write and it can never drift from its source fields.
Matching and ranking depend on this contract:

* every field is run through ``to_tsvector(<language>, ...)``, i.e. tokenized,
  lower-cased and stemmed with the language's snowball dictionary
  (``german`` by default: "Implantate" and "Implantat" share a lexeme);
* lexemes carry a weight by field group, used by ``ts_rank``:

  ====== ================================ =====================
  weight fields                           ts_rank default factor
  ====== ================================ =====================
  A      name, variant_name               1.0
  B      manufacturer, product_group      0.4
  C      sku                              0.2
  D      description (markup stripped)    0.1
  ====== ================================ =====================

* queries are parsed with ``plainto_tsquery`` in the same language, so a
  multi-word query is an AND of its stemmed terms and no operator syntax
  reaches the user.

A store built on another technology must reproduce the same weights and
stemming to keep the observable ranking.
"""

SEARCH_WEIGHTS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("A", ("name", "variant_name")),
    ("B", ("manufacturer", "product_group")),
    ("C", ("sku",)),
    ("D", ("description",)),
)

# Fields whose markup is removed before indexing.
MARKUP_FIELDS = frozenset({"description"})

_MARKUP_PATTERN = "<[^>]+>"


def _field_source(field: str) -> str:
    if field in MARKUP_FIELDS:
        return f"regexp_replace({field}, '{_MARKUP_PATTERN}', '', 'g')"
    return field


def search_vector_sql(language: str = "german") -> str:
    """SQL expression of the generated ``search_vector`` column.

    Shared by the ORM model and the migration so both describe the same
    column. ``language`` must be a text search configuration name.
    """
    if not language.isidentifier():
        raise ValueError(f"Invalid text search configuration: {language!r}")

    parts = []
    for weight, fields in SEARCH_WEIGHTS:
        for field in fields:
            parts.append(
                f"setweight(to_tsvector('{language}', coalesce({_field_source(field)}, '')), '{weight}')"
            )
    return " || ".join(parts)
