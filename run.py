import os
from farmsouk import create_app, db

app = create_app(os.getenv('FLASK_ENV', 'default'))

if __name__ == '__main__':
    with app.app_context():
        db.create_all()
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=int(os.getenv('PORT', 3000)))
