"""
PyInstaller ランタイムフック: 同梱した Tcl/Tk を使うよう環境変数を設定する。

exe 内の `tcl/tcl8.x`・`tcl/tk8.x` を `TCL_LIBRARY`・`TK_LIBRARY` に向ける。
既に設定済みの値は上書きしない。設定はこのプロセス内だけで有効。
"""

from __future__ import annotations

import glob
import os
import sys


def bundle_root() -> str:
    # onefile は展開先ディレクトリ、onedir は実行ファイルのあるディレクトリ
    return getattr(sys, "_MEIPASS", os.path.dirname(sys.executable))


def point_tcl_tk_at_bundle(root: str) -> None:
    for var, pattern in (("TCL_LIBRARY", "tcl*"), ("TK_LIBRARY", "tk*")):
        if os.environ.get(var):
            continue
        found = sorted(glob.glob(os.path.join(root, "tcl", pattern)))
        if found:
            os.environ[var] = found[0]


point_tcl_tk_at_bundle(bundle_root())
