# ABOUTME: SQL DDL statements for the Bookstock catalog database.
# ABOUTME: Defines products, categories, product metadata, media, and settings tables.

SCHEMA_V1 = """
-- Product categories, created on demand by name
CREATE TABLE categories (
    id    INTEGER PRIMARY KEY AUTOINCREMENT,
    name  TEXT NOT NULL UNIQUE,
    slug  TEXT NOT NULL UNIQUE
);

-- Stored cover images
CREATE TABLE media (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    title          TEXT NOT NULL DEFAULT '',
    filename       TEXT NOT NULL,
    path           TEXT NOT NULL,
    mime_type      TEXT NOT NULL,
    width          INTEGER,
    height         INTEGER,
    is_placeholder INTEGER NOT NULL DEFAULT 0,
    date_added     TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

-- Catalog entries (one per book title)
CREATE TABLE products (
    id                INTEGER PRIMARY KEY AUTOINCREMENT,
    name              TEXT NOT NULL,
    status            TEXT NOT NULL DEFAULT 'publish',
    description       TEXT NOT NULL DEFAULT '',
    short_description TEXT NOT NULL DEFAULT '',
    regular_price     REAL,
    price             REAL,
    manage_stock      INTEGER NOT NULL DEFAULT 1,
    stock_quantity    INTEGER NOT NULL DEFAULT 0,
    stock_status      TEXT NOT NULL DEFAULT 'outofstock',
    category_id       INTEGER REFERENCES categories(id) ON DELETE SET NULL,
    cover_media_id    INTEGER REFERENCES media(id) ON DELETE SET NULL,
    date_created      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now')),
    date_modified     TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE INDEX idx_products_name ON products(name);

-- Arbitrary string metadata per product (identifiers, authors, ...)
CREATE TABLE product_meta (
    product_id INTEGER NOT NULL REFERENCES products(id) ON DELETE CASCADE,
    key        TEXT NOT NULL,
    value      TEXT NOT NULL,
    PRIMARY KEY (product_id, key)
);

CREATE INDEX idx_product_meta_key_value ON product_meta(key, value);

-- Flat importer configuration
CREATE TABLE settings (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""
