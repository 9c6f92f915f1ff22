import csv

CSV_HEADER = ["Tag", "Count", "Source IDs", "Source Files"]
LIST_SEPARATOR = ", "


def record_to_row(record):
    return [
        record.tag,
        record.count,
        LIST_SEPARATOR.join(record.source_ids),
        LIST_SEPARATOR.join(record.source_files),
    ]


def write_csv(records, output_file):
    """
    Writes tag records to a CSV file with a Tag, Count, Source IDs, Source Files header.

    Membership lists are joined with ", " and quoted by the csv module.
    The file is written as UTF-8 with a BOM so spreadsheet tools pick up
    the CJK tags correctly.

    Args:
        records (list): TagRecord entries, already sorted.
        output_file (str): Path of the CSV file to create.
    """
    with open(output_file, 'w', encoding='utf-8-sig', newline='') as output:
        writer = csv.writer(output)
        writer.writerow(CSV_HEADER)
        for record in records:
            writer.writerow(record_to_row(record))
