"""
Defaults read from the environment. CLI flags override them.

Numeric defaults stay raw strings so argparse's type=int reports a bad
value the same way it reports a bad flag.
"""

import os

from .models import DEFAULT_LOG_INTERVAL

DEFAULT_LOG_INTERVAL_ENV = os.environ.get("S3FINDER_LOG_INTERVAL", "").strip() or str(DEFAULT_LOG_INTERVAL)
DEFAULT_PAGE_SIZE = os.environ.get("S3FINDER_PAGE_SIZE", "").strip() or None  # None -> server default (1000 on AWS)

AWS_REGION = os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION")
S3_ENDPOINT_URL = os.environ.get("S3_ENDPOINT_URL") or None

ACCESS_KEY_ID_ENV = "AWS_ACCESS_KEY_ID"
SECRET_ACCESS_KEY_ENV = "AWS_SECRET_ACCESS_KEY"
