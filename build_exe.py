"""
PyInstaller で Tkinter 版オセロを .exe にまとめるビルドスクリプト。

ポイント
- _tkinter の DLL エラー回避のため、Tcl/Tk データと DLL を自動同梱
- `--onefile` を付けると1ファイル版
- `icon.ico` がこのファイルと同じ場所にあれば自動でアイコン適用

使い方
- `pip install .[build]`
- 標準: `python build_exe.py`
- 1ファイル: `python build_exe.py --onefile`

出力
- フォルダ版: `dist/Othello/Othello.exe`
- 1ファイル版: `dist/Othello.exe`
"""

from __future__ import annotations

import os
import sys

import PyInstaller.__main__


HERE = os.path.dirname(os.path.abspath(__file__))


def _tcl_tk_dirs(root: str) -> list[str]:
    """`root` 直下の tcl8.x / tk8.x ディレクトリ。"""
    if not os.path.isdir(root):
        return []
    return [
        os.path.join(root, name)
        for name in sorted(os.listdir(root))
        if name.startswith(("tcl", "tk")) and os.path.isdir(os.path.join(root, name))
    ]


def collect_tcl_tk_add_data() -> list[str]:
    """Tcl/Tk のライブラリを `tcl/` 以下へ同梱する --add-data 指定を返す。

    CPython 標準の <base>/tcl/ と conda 系の <base>/Library/tcl/ を探す。
    """
    base = sys.base_prefix
    specs: list[str] = []
    for root in (os.path.join(base, "tcl"), os.path.join(base, "Library", "tcl")):
        for src in _tcl_tk_dirs(root):
            specs.append(f"{src}{os.pathsep}{os.path.join('tcl', os.path.basename(src))}")
    return specs


def collect_tk_binaries() -> list[str]:
    """_tkinter.pyd と tcl/tk の DLL を同梱する --add-binary 指定を返す。"""
    base = sys.base_prefix
    bins: list[str] = []
    pyd = os.path.join(base, "DLLs", "_tkinter.pyd")
    if os.path.isfile(pyd):
        bins.append(f"{pyd}{os.pathsep}.")
    for dll_dir in (os.path.join(base, "DLLs"), os.path.join(base, "Library", "bin")):
        if not os.path.isdir(dll_dir):
            continue
        for name in sorted(os.listdir(dll_dir)):
            lower = name.lower()
            if lower.endswith(".dll") and lower.startswith(("tcl", "tk")):
                bins.append(f"{os.path.join(dll_dir, name)}{os.pathsep}.")
    return bins


def build_options(argv: list[str]) -> list[str]:
    opts: list[str] = [
        "--noconsole",
        "--name",
        "Othello",
        "--hidden-import",
        "tkinter",
        "--hidden-import",
        "_tkinter",
        "--collect-all",
        "tkinter",
    ]
    if "--onefile" in argv:
        opts.append("--onefile")

    icon_path = os.path.join(HERE, "icon.ico")
    if os.path.exists(icon_path):
        opts += ["--icon", icon_path]

    for spec in collect_tcl_tk_add_data():
        opts += ["--add-data", spec]
    for spec in collect_tk_binaries():
        opts += ["--add-binary", spec]

    # 実行時に tcl/tk の場所を環境変数へ設定するフック
    rt_hook = os.path.join(HERE, "rt_tk_path.py")
    if os.path.exists(rt_hook):
        opts += ["--runtime-hook", rt_hook]

    opts.append(os.path.join(HERE, "othello", "main.py"))
    return opts


def main() -> None:
    opts = build_options(sys.argv[1:])
    print("PyInstaller options:")
    for o in opts:
        print(" ", o)
    PyInstaller.__main__.run(opts)


if __name__ == "__main__":
    main()
