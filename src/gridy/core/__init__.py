"""グリッド生成コア（設定・プリミティブ・種別ごとの生成アルゴリズム）。"""
