from dataclasses import dataclass
from typing import Optional

DOXYGEN_LICENSE_HEADER = """/*
 @licstart  The following is the entire license notice for the JavaScript code in this file.

 The MIT License (MIT)

 Copyright (C) 1997-2020 by Dimitri van Heesch

 Permission is hereby granted, free of charge, to any person obtaining a copy of this software
 and associated documentation files (the "Software"), to deal in the Software without restriction,
 including without limitation the rights to use, copy, modify, merge, publish, distribute,
 sublicense, and/or sell copies of the Software, and to permit persons to whom the Software is
 furnished to do so, subject to the following conditions:

 The above copyright notice and this permission notice shall be included in all copies or
 substantial portions of the Software.

 THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED, INCLUDING
 BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
 NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM,
 DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
 OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.

 @licend  The above is the entire license notice for the JavaScript code in this file
*/
"""


@dataclass
class MenuConfig:
    """Configuration for reading, writing and checking menu data."""

    variable_name: str = "menudata"
    home_url: str = "index.html"
    root_text: str = "Home"  # Used when no top-level entry links to home_url
    encoding: str = "utf-8"
    license_header: Optional[str] = DOXYGEN_LICENSE_HEADER
    timeout: int = 30
    retry_count: int = 3
    retry_delay: int = 1
    max_workers: int = 5
    output_dir: str = "output"
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )
    response_cache_size: int = 50  # Number of responses to cache
    pool_connections: int = 10  # Number of connection pools to keep
    pool_maxsize: int = 10  # Maximum number of connections per pool
    pool_block: bool = True  # Whether to block when pool is full
    check_anchors: bool = True  # Whether to verify #fragments in target pages
    verbose_progress: bool = (
        False  # Whether to log every checked target instead of a progress bar
    )

    def __post_init__(self):
        if not self.variable_name or not self.variable_name.isidentifier():
            raise ValueError(f"Invalid variable name: {self.variable_name!r}")
        if self.max_workers < 1:
            self.max_workers = 1
