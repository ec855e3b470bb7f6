#!/usr/bin/env python3
"""
Demo: Structure Mining on a Handful of Log Lines

Shows the tree right after ingestion and again after refinement, so the
effect of chain squashing and prefix/suffix splitting is visible.

Usage:
    python demo_structure.py [LOGFILE]

Without LOGFILE a small built-in sample is used.
"""

import sys
from pathlib import Path

from logstruct.services import MiningSession, read_lines, render_tree

SAMPLE_LOGS = [
    "Oct 11 22:14:15 host1 sshd[1201]: Accepted password for bob from 10.0.0.1 port 50122 ssh2",
    "Oct 11 22:14:17 host1 sshd[1202]: Accepted password for alice from 10.0.0.7 port 50123 ssh2",
    "Oct 11 22:15:02 host2 sshd[1203]: Connection closed by 192.168.1.20/24",
    "Oct 11 22:15:09 host2 sshd[1210]: Connection closed by 192.168.1.21/24",
    "2003-10-11T22:14:15.003Z kernel: link up after 0:00:12",
    "2003-10-11T22:14:16.003Z kernel: link up after 0:00:13",
]


def main():
    if len(sys.argv) > 1:
        with open(Path(sys.argv[1]), 'r', encoding='utf-8', errors='replace', newline='\n') as f:
            logs = list(read_lines(f))
    else:
        logs = SAMPLE_LOGS

    session = MiningSession()
    session.add_lines(logs)

    print(f"{'='*70}")
    print(f"Tree after reading {session.lines} lines ({session.tree.node_count} nodes)")
    print(f"{'='*70}")
    for line in render_tree(session.tree):
        print(line)

    session.refine()
    stats = session.stats()

    print(f"\n{'='*70}")
    print(f"Refined tree ({stats.nodes} nodes, {stats.squashed} squashed, "
          f"{stats.disjoined} prefix/suffix splits)")
    print(f"{'='*70}")
    for line in render_tree(session.tree):
        print(line)


if __name__ == "__main__":
    main()
