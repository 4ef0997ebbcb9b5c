from github_trending.app import main

if __name__ == "__main__":
    raise SystemExit(main())
