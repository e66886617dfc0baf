"""
どこで: `epidraw.engine.render` サブパッケージ。
何を: `SessionFrame` → 線レイヤーへの変換（scene）と、ModernGL による描画（renderer）。
"""
