import os
import sys
import mmap
import sqlite3
from datetime import datetime

from tqdm import tqdm

from aggregateTags import TagAggregator, aggregate_files, analyze_file
from csvExport import write_csv
from dbInit import initDatabase
from dbOperations import dbReplaceTags, dbInsertErrors
from versionInfo import get_full_version_info

# ========== Configuration ==========
ALLOWED_EXTENSIONS = {".txt"}
FILE_ENCODING = "utf-8-sig"
DEFAULT_OUTPUT_FILE = "tags.csv"
DEFAULT_DB_PATH = "results.db"
# ===================================


class ScanError(Exception):
    """Raised when a folder scan cannot start at all."""


def find_text_files(directory):
    """
    Recursively lists .txt files under directory.

    Directories and file names are visited in sorted order so that repeated
    scans fold files, and therefore fill provenance lists, in the same order.
    """
    if not os.path.isdir(directory):
        raise ScanError(f"The provided path is not a valid directory: {directory}")

    file_paths = []
    for root, dirs, files in os.walk(directory):
        dirs.sort()
        for file in sorted(files):
            if os.path.splitext(file)[1].lower() in ALLOWED_EXTENSIONS:
                file_paths.append(os.path.join(root, file))
    return file_paths


def read_text_file(file_path):
    """
    Reads a whole file as text. Raises on I/O or decode failure.
    """
    with open(file_path, 'rb') as file:
        # mmap refuses empty files
        if os.fstat(file.fileno()).st_size == 0:
            return ""
        with mmap.mmap(file.fileno(), 0, access=mmap.ACCESS_READ) as mmapped_file:
            return mmapped_file.read().decode(FILE_ENCODING)


def iter_file_texts(file_paths, errors, progress=None):
    """
    Yields (file_path, text) for each file, one at a time.

    A file that fails to read is yielded with text None and its error is
    appended to errors as (file_path, error_message). progress, if given, is
    called as progress(processed, total, file_name) once the consumer has
    taken each file.
    """
    total = len(file_paths)
    for processed, file_path in enumerate(tqdm(file_paths, desc="Scanning", unit="file"), start=1):
        file_name = os.path.basename(file_path)
        try:
            text = read_text_file(file_path)
        except UnicodeDecodeError as e:
            errors.append((file_path, f"Unicode decode error: {str(e)}"))
            text = None
        except Exception as e:
            errors.append((file_path, f"General error: {str(e)}"))
            text = None

        if text is None:
            tqdm.write(f"Failed to process {file_name}: {errors[-1][1]}")

        yield file_path, text

        if progress is not None:
            progress(processed, total, file_name)


def scan_directory(directory, progress=None):
    """
    Scans every .txt file under directory into one shared tag tally.

    Args:
        directory (str): Folder to scan recursively.
        progress (callable): Optional progress(processed, total, file_name) hook.

    Returns:
        tuple: (records, errors, aggregator) where records are TagRecord
        entries sorted by tag and errors are (file_path, error_message) pairs.
    """
    file_paths = find_text_files(directory)
    print(f"Number of files to be scanned: {len(file_paths)}")

    errors = []
    aggregator = TagAggregator()
    records = aggregate_files(iter_file_texts(file_paths, errors, progress), aggregator)
    return records, errors, aggregator


def write_log(log_path, source, records, errors, started, finished, file_count=None, occurrences=None):
    with open(log_path, "a", encoding="utf-8") as log_file:
        log_file.write(f"Scan started at {started}\n")
        log_file.write(f"Source: {source}\n")
        if file_count is not None:
            log_file.write(f"Number of files scanned: {file_count}\n")
        if occurrences is not None:
            log_file.write(f"Tag occurrences: {occurrences}\n")

        if errors:
            log_file.write("\n=== Errors ===\n")
            for file_path, error_msg in errors:
                log_file.write(f"{file_path}: {error_msg}\n")

        log_file.write("\n=== Tag Summary ===\n")
        for record in records:
            log_file.write(f"{record.tag}: {record.count} occurrences, {len(record.source_ids)} ids\n")

        log_file.write(f"\nScan completed at {finished}\n")


def save_results(records, errors, output_file, db_path):
    # Open the database first so a bad db_path leaves no half-written output
    conn = initDatabase(db_path)
    try:
        write_csv(records, output_file)
        dbReplaceTags(conn, records)
        if errors:
            dbInsertErrors(conn, errors)
    finally:
        conn.close()


def run(source, output_file=DEFAULT_OUTPUT_FILE, db_path=DEFAULT_DB_PATH):
    """
    Analyzes a single file or a whole folder and writes the CSV, database and log.

    Returns the sorted tag records.
    """
    started = datetime.now()
    file_count = None

    if os.path.isfile(source):
        print(f"Analyzing file: {source}")
        records = analyze_file(source, encoding=FILE_ENCODING)
        errors = []
        occurrences = sum(record.count for record in records)
    else:
        records, errors, aggregator = scan_directory(source)
        file_count = aggregator.processed_files + aggregator.skipped_files
        occurrences = aggregator.total_occurrences()
        if file_count == 0:
            print("No .txt files found in the folder.")

    save_results(records, errors, output_file, db_path)

    output_dir = os.path.dirname(os.path.abspath(output_file))
    log_path = os.path.join(output_dir, f"logfile_{started.strftime('%Y-%m-%d_%H-%M-%S')}.txt")
    write_log(log_path, source, records, errors, started, datetime.now(), file_count, occurrences)

    if file_count is None:
        print(f"Analysis complete: {len(records)} distinct tags, {occurrences} occurrences found.")
    else:
        print(f"Scan complete: {file_count} files processed, {len(records)} distinct tags, {occurrences} occurrences found.")
        if errors:
            print(f"{len(errors)} files could not be read, see the log for details.")
    print(f"Results written to {output_file}")
    return records


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv

    if args and args[0] in ("-v", "--version"):
        print(get_full_version_info())
        return 0

    if args:
        source = args[0].strip()
    else:
        source = input("Enter the file or folder path to analyze: ").strip()

    if len(args) >= 2:
        output_file = args[1].strip()
    elif args:
        output_file = DEFAULT_OUTPUT_FILE
    else:
        output_file = input(f"Enter the path for the CSV output (default {DEFAULT_OUTPUT_FILE}): ").strip()
        output_file = output_file or DEFAULT_OUTPUT_FILE

    try:
        run(source, output_file)
    except ScanError as e:
        print(f"Error: {e}")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}")
        return 1
    except sqlite3.Error as e:
        print(f"Database error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nScan cancelled.")
        return 130

    return 0


if __name__ == '__main__':
    sys.exit(main())
