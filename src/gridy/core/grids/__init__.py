"""組み込みグリッド種別の生成関数群（`gridy.core.builtins` 経由で登録される）。"""
