# Copyright 2026 The tzoracle Authors
#
# MIT License

import os
import logging
import json

from tzoracle.data_types.oracle_types import RunReport


class JsonGenerator:
    """Write the RunReport of a verification run as JSON, so that the failures
    of two runs can be compared with a plain diff.
    """
    def __init__(
        self,
        report: RunReport,
        json_file: str
    ):
        self.report = report
        self.json_file = json_file

    def generate_files(self, output_dir: str) -> str:
        """Write the report into 'output_dir', creating it if needed. Returns
        the full name of the file.
        """
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        full_filename = os.path.join(output_dir, self.json_file)
        with open(full_filename, 'w', encoding='utf-8') as output_file:
            json.dump(self.report, output_file, indent=2, ensure_ascii=False)
            output_file.write('\n')
        logging.info(
            "Created %s (%d failures)", full_filename, self.report['failed'])
        return full_filename
