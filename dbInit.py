import sqlite3

def initDatabase(db_path="results.db"):
    """
    Opens the SQLite results database and creates the tags and errors tables.
    """
    conn = sqlite3.connect(db_path)
    try:
        cursor = conn.cursor()

        # Create tags table
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS tags (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                tag TEXT NOT NULL UNIQUE,
                count INTEGER NOT NULL,
                source_ids TEXT NOT NULL,
                source_files TEXT NOT NULL,
                timestamp DATETIME DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        # Create errors table
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS errors (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                file_path TEXT NOT NULL,
                error_message TEXT NOT NULL,
                timestamp DATETIME DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        conn.commit()
    except sqlite3.Error as e:
        print(f"Error initializing database {db_path}: {e}")
        conn.close()
        raise

    return conn
