from bookshelf.main import serve

serve()
