"""Database schema for session files."""

SCHEMA = """
-- Bundles table: one row per loaded bundle, in load order
CREATE TABLE IF NOT EXISTS bundles (
    id TEXT PRIMARY KEY,
    position INTEGER NOT NULL,
    name TEXT NOT NULL,
    width INTEGER NOT NULL,
    height INTEGER NOT NULL,
    html TEXT NOT NULL
);

-- Assets table: inline data for each bundle, keyed by basename
CREATE TABLE IF NOT EXISTS assets (
    bundle_id TEXT NOT NULL,
    position INTEGER NOT NULL,
    basename TEXT NOT NULL,
    data_uri TEXT NOT NULL,
    PRIMARY KEY (bundle_id, basename),
    FOREIGN KEY (bundle_id) REFERENCES bundles(id)
);

-- Metadata table: session state such as the selected bundle
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT
);

CREATE INDEX IF NOT EXISTS idx_assets_bundle ON assets(bundle_id);
"""
