import json

from aggregateTags import TagRecord

def _encode_list(values):
    return json.dumps(list(values), ensure_ascii=False)

def dbReplaceTags(conn, records):
    """
    Stores the tag records of one run, replacing whatever an earlier run left.
    Source id and source file lists are stored as JSON arrays.
    """
    cursor = conn.cursor()
    cursor.execute("DELETE FROM tags")
    cursor.executemany(
        "INSERT INTO tags (tag, count, source_ids, source_files) VALUES (?, ?, ?, ?)",
        [(r.tag, r.count, _encode_list(r.source_ids), _encode_list(r.source_files)) for r in records]
    )
    conn.commit()

def dbInsertErrors(conn, errors):
    cursor = conn.cursor()
    cursor.executemany(
        "INSERT INTO errors (file_path, error_message) VALUES (?, ?)",
        errors
    )
    conn.commit()

def dbGetTags(conn):
    cursor = conn.cursor()
    cursor.execute("SELECT tag, count, source_ids, source_files FROM tags")
    records = [
        TagRecord(tag=tag, count=count, source_ids=json.loads(ids), source_files=json.loads(files))
        for tag, count, ids, files in cursor.fetchall()
    ]
    # SQLite collation is not guaranteed to match Python's str ordering
    return sorted(records, key=lambda r: r.tag)