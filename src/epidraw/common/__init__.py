"""
どこで: `epidraw.common` サブパッケージ。
何を: 設定・環境変数パース・ロギング・型エイリアスなど依存の少ない共通部品。
"""
