"""
Widget sample app entry point.
"""
import os
import sys
import traceback

config_name = os.getenv('FLASK_ENV', 'development')
print(f"[WidgetApp] Config: {config_name}")
print(f"[WidgetApp] API_PORT: {os.getenv('API_PORT', 'not set')}")
print(f"[WidgetApp] DATABASE_URL: {'set' if os.getenv('DATABASE_URL') else 'NOT SET (sqlite:///sample-app.db)'}")

try:
    from sample_app import create_app
    app = create_app(config_name)
    print(f"[WidgetApp] Routes: {len(list(app.url_map.iter_rules()))}")
except Exception as e:
    print(f"[WidgetApp] FATAL ERROR during app creation: {e}")
    traceback.print_exc()
    sys.exit(1)

if __name__ == '__main__':
    app.run(
        host='0.0.0.0',
        port=int(os.getenv('API_PORT', 3001)),
        debug=os.getenv('FLASK_ENV') == 'development'
    )
