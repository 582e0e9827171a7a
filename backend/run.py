import os

from stonepaper import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server to enable websockets in dev
    socketio.run(app, host=os.environ.get('HOST', '0.0.0.0'), port=int(os.environ.get('PORT', '3000')), debug=True)
