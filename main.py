#!/usr/bin/env python3
"""
EC2 API Client - Entry Point
Describe, launch and terminate instances through the EC2 query API.
"""

import sys

# Add package directory to path for proper imports
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent))

from ec2_client.cli import main

if __name__ == '__main__':
    sys.exit(main())
