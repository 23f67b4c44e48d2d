"""生成済みプリミティブ列をラスタ/ベクタへ変換するアダプタ群。"""
