from mr_page_rank.cli import main

main()
